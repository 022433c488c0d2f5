"""Validator: configuration plus the recursive traversal engine.

A Validator bundles a metadata key, a constraint registry and a naming
policy. ``validate()`` walks a value by runtime shape:

- None: nothing beneath it
- record (dataclass instance): each member's own line, then its value
- sequence: each element at ``path[i]``
- mapping: each key at ``path[key](key)``, each value at ``path[key](value)``
- anything else: scalar, no recursion

Only failing paths are reported. Mapping entries are visited in the
mapping's iteration order (insertion order for dict).

Cyclic values are not detected; a value reachable from itself recurses
until RecursionError. Callers must not pass cyclic graphs.

Registering on a Validator while another thread validates with the same
instance is not synchronized; serialize those calls.
"""

import logging
from typing import Any

from tagcheck.config import ValidatorSettings, load_constraint
from tagcheck.fields import (
    DEFAULT_ALIAS_KEY,
    DEFAULT_METADATA_KEY,
    Member,
    is_mapping,
    is_record,
    is_sequence,
    iter_members,
)
from tagcheck.parser import is_skip, parse_spec
from tagcheck.registry import ConstraintRegistry
from tagcheck.types import (
    ConfigurationError,
    ConstraintError,
    ConstraintFunc,
    ErrorKind,
    ErrorList,
    ErrorMap,
    ValidationFailed,
)

logger = logging.getLogger(__name__)


def join_path(parent: str, name: str) -> str:
    """Join a parent path and a member name with a dot, skipping empty sides."""
    if not parent:
        return name
    if not name:
        return parent
    return f"{parent}.{name}"


def _record(errors: ErrorMap, path: str, found: ErrorList) -> None:
    """Add failures at a path, appending when flattened members share it."""
    if path in errors:
        errors[path].extend(found)
    else:
        errors[path] = found


class Validator:
    """A validation configuration.

    Example:
        v = Validator()
        v.register("even", is_even)
        errors = v.validate(order)
        if errors:
            for path, errs in errors.items():
                ...

    Attributes:
        metadata_key: Field metadata key holding constraint lines
        alias_naming: Use alias metadata for error paths
        alias_key: Field metadata key holding the alias
        registry: Constraint functions available to this instance
    """

    def __init__(
        self,
        metadata_key: str = DEFAULT_METADATA_KEY,
        *,
        alias_naming: bool = False,
        alias_key: str = DEFAULT_ALIAS_KEY,
        registry: ConstraintRegistry | None = None,
    ):
        if not metadata_key:
            raise ConfigurationError("Metadata key must not be empty")
        self.metadata_key = metadata_key
        self.alias_naming = alias_naming
        self.alias_key = alias_key
        self.registry = registry if registry is not None else ConstraintRegistry.with_builtins()

    @classmethod
    def from_settings(cls, settings: ValidatorSettings) -> "Validator":
        """Create a Validator from settings, registering configured constraints.

        Raises:
            ConfigurationError: If a configured constraint cannot be imported
        """
        validator = cls(
            settings.metadata_key,
            alias_naming=settings.alias_naming,
            alias_key=settings.alias_key,
        )
        for name, target in settings.constraints.items():
            validator.register(name, load_constraint(target))
        return validator

    def __repr__(self) -> str:
        return (
            f"Validator(metadata_key={self.metadata_key!r}, "
            f"alias_naming={self.alias_naming!r}, alias_key={self.alias_key!r})"
        )

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def copy(self) -> "Validator":
        """Return an independent copy; the registry is duplicated."""
        return Validator(
            self.metadata_key,
            alias_naming=self.alias_naming,
            alias_key=self.alias_key,
            registry=self.registry.copy(),
        )

    def with_metadata_key(self, key: str) -> "Validator":
        """Return a copy reading constraint lines from another metadata key.

        Lets one type carry several independent constraint sets.
        """
        if not key:
            raise ConfigurationError("Metadata key must not be empty")
        clone = self.copy()
        clone.metadata_key = key
        return clone

    def with_alias_naming(self, enabled: bool = True) -> "Validator":
        """Return a copy that names error paths by alias when one is set."""
        clone = self.copy()
        clone.alias_naming = enabled
        return clone

    def register(self, name: str, func: ConstraintFunc) -> None:
        """Register a constraint function on this instance only.

        Affects calls made afterwards; reports already returned are unchanged.

        Raises:
            ConfigurationError: If name is empty or func is not callable
        """
        self.registry.register(name, func)

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def validate(self, value: Any) -> ErrorMap | None:
        """Validate a value and everything reachable beneath it.

        Args:
            value: Any value; non-records are dispatched by shape from path ""

        Returns:
            ErrorMap of failing paths, or None when nothing failed
        """
        errors = ErrorMap()
        self._traverse(value, "", errors)
        return errors or None

    def valid(self, value: Any, line: str) -> ErrorList | None:
        """Check a single value against a constraint line, without recursion.

        Returns:
            ErrorList in constraint order, or None when every check passed
        """
        if is_skip(line):
            return None
        return self._check(value, line) or None

    def ensure_valid(self, value: Any) -> None:
        """Validate a value, raising when anything failed.

        Raises:
            ValidationFailed: Carrying the ErrorMap
        """
        errors = self.validate(value)
        if errors:
            raise ValidationFailed(errors)

    # -------------------------------------------------------------------------
    # Traversal
    # -------------------------------------------------------------------------

    def _check(self, value: Any, line: str) -> ErrorList:
        """Run every constraint in a line against one value."""
        specs = parse_spec(line)
        funcs = []
        for spec in specs:
            func = self.registry.get(spec.name)
            if func is None:
                logger.debug("Unknown constraint %r in %r", spec.name, line)
                return ErrorList([ConstraintError(ErrorKind.UNKNOWN_TAG)])
            funcs.append((func, spec.param))

        errors = ErrorList()
        for func, param in funcs:
            try:
                err = func(value, param)
            except ConstraintError as raised:
                err = raised
            if err is not None:
                errors.append(err)
        return errors

    def _traverse(self, value: Any, path: str, errors: ErrorMap) -> None:
        """Dispatch on the runtime shape of value, recording into errors."""
        if value is None:
            return
        if is_record(value):
            for member in iter_members(value):
                self._validate_member(value, member, path, errors)
        elif is_mapping(value):
            for key, item in value.items():
                self._traverse(key, f"{path}[{key}](key)", errors)
                self._traverse(item, f"{path}[{key}](value)", errors)
        elif is_sequence(value):
            for i, item in enumerate(value):
                self._traverse(item, f"{path}[{i}]", errors)

    def _validate_member(self, record: Any, member: Member, parent: str, errors: ErrorMap) -> None:
        line = member.line(self.metadata_key)
        if is_skip(line):
            return
        if member.private and not member.embedded:
            return

        path = join_path(parent, self._member_name(member))
        try:
            value = getattr(record, member.name)
        except AttributeError:
            logger.debug("Member %r of %s is unreadable", member.name, type(record).__name__)
            if line:
                _record(errors, path, ErrorList([ConstraintError(ErrorKind.CANNOT_VALIDATE)]))
            return

        if line:
            if member.private:
                found = ErrorList([ConstraintError(ErrorKind.CANNOT_VALIDATE)])
            else:
                found = self._check(value, line)
            if found:
                _record(errors, path, found)

        self._traverse(value, path, errors)

    def _member_name(self, member: Member) -> str:
        """Name of a member in error paths.

        Under alias naming, an embedded member whose alias is set but empty
        contributes no path segment; its members are reported at the
        owner's level.
        """
        if self.alias_naming:
            alias = member.alias(self.alias_key)
            if alias:
                return alias
            if alias is not None and member.embedded:
                return ""
        return member.name
