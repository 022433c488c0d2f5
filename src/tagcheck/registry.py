"""Constraint registry for tagcheck.

Maps constraint names (as written in metadata) to checking functions.
Unlike a process-wide registry, every Validator owns its own instance, so
registering a function on one configuration never leaks into another.
"""

import logging

from tagcheck.builtins import BUILTIN_CONSTRAINTS
from tagcheck.types import ConfigurationError, ConstraintFunc

logger = logging.getLogger(__name__)


class ConstraintRegistry:
    """Registry of named constraint functions.

    Example:
        registry = ConstraintRegistry.with_builtins()
        registry.register("even", lambda v, _: None if v % 2 == 0 else ConstraintError())

        fn = registry.get("even")
    """

    def __init__(self, functions: dict[str, ConstraintFunc] | None = None):
        self._functions: dict[str, ConstraintFunc] = dict(functions or {})

    @classmethod
    def with_builtins(cls) -> "ConstraintRegistry":
        """Create a registry holding every built-in constraint."""
        return cls(BUILTIN_CONSTRAINTS)

    def register(self, name: str, func: ConstraintFunc) -> None:
        """Register a constraint function by name.

        Re-registering a name replaces the previous function.

        Args:
            name: Name used in metadata lines (e.g., "min", "even")
            func: Callable taking (value, param) and returning a
                ConstraintError or None

        Raises:
            ConfigurationError: If name is empty or func is not callable
        """
        if not name:
            raise ConfigurationError("Constraint name must not be empty")
        if func is None or not callable(func):
            raise ConfigurationError(f"Constraint '{name}' needs a callable, got {func!r}")
        if name in self._functions:
            logger.debug("Replacing constraint function '%s'", name)
        self._functions[name] = func

    def get(self, name: str) -> ConstraintFunc | None:
        """Get a constraint function by name, or None if not registered."""
        return self._functions.get(name)

    def is_registered(self, name: str) -> bool:
        """Check if a constraint is registered."""
        return name in self._functions

    def list_registered(self) -> list[str]:
        """List all registered constraint names."""
        return sorted(self._functions)

    def copy(self) -> "ConstraintRegistry":
        """Return an independent registry with the same functions."""
        return ConstraintRegistry(self._functions)

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __len__(self) -> int:
        return len(self._functions)
