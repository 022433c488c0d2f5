"""tagcheck: validate values against constraints declared in field metadata.

Usage:
    from dataclasses import dataclass
    from tagcheck import constrained, validate, valid

    @dataclass
    class Account:
        name: str = constrained("nonzero,max=64")
        age: int = constrained("min=18")

    errors = validate(Account(name="", age=12))
    # {"name": [zero value], "age": [less than min]}

    valid([1, 2, 3], "min=1,max=5")  # None

The module-level functions operate on one shared default Validator, created
lazily from ``ValidatorSettings.from_env()``. Prefer constructing a Validator
and passing it where it is needed; registering on the default instance is
visible to every later call in the process.
"""

import threading
from typing import Any

from tagcheck.config import ValidatorSettings
from tagcheck.fields import constrained
from tagcheck.parser import parse_spec
from tagcheck.registry import ConstraintRegistry
from tagcheck.types import (
    ConfigurationError,
    ConstraintError,
    ConstraintFunc,
    ConstraintSpec,
    ErrorKind,
    ErrorList,
    ErrorMap,
    ValidationFailed,
)
from tagcheck.validator import Validator

_default: Validator | None = None
_default_lock = threading.Lock()


def default_validator() -> Validator:
    """Return the shared default Validator, creating it on first use."""
    global _default
    with _default_lock:
        if _default is None:
            _default = Validator.from_settings(ValidatorSettings.from_env())
        return _default


def reset_default_validator() -> None:
    """Drop the shared default Validator; the next call recreates it."""
    global _default
    with _default_lock:
        _default = None


def register(name: str, func: ConstraintFunc) -> None:
    """Register a constraint function on the default Validator.

    Raises:
        ConfigurationError: If name is empty or func is not callable
    """
    validator = default_validator()
    with _default_lock:
        validator.register(name, func)


def validate(value: Any) -> ErrorMap | None:
    """Validate a value with the default Validator."""
    return default_validator().validate(value)


def valid(value: Any, line: str) -> ErrorList | None:
    """Check one value against a constraint line with the default Validator."""
    return default_validator().valid(value, line)


def ensure_valid(value: Any) -> None:
    """Validate with the default Validator, raising ValidationFailed on errors."""
    default_validator().ensure_valid(value)


def with_metadata_key(key: str) -> Validator:
    """Return a copy of the default Validator reading another metadata key."""
    validator = default_validator()
    with _default_lock:
        return validator.with_metadata_key(key)


def with_alias_naming(enabled: bool = True) -> Validator:
    """Return a copy of the default Validator with alias naming set."""
    validator = default_validator()
    with _default_lock:
        return validator.with_alias_naming(enabled)


__all__ = [
    # Types
    "ConfigurationError",
    "ConstraintError",
    "ConstraintFunc",
    "ConstraintSpec",
    "ErrorKind",
    "ErrorList",
    "ErrorMap",
    "ValidationFailed",
    # Configuration
    "ConstraintRegistry",
    "Validator",
    "ValidatorSettings",
    "constrained",
    "parse_spec",
    # Default instance
    "default_validator",
    "ensure_valid",
    "register",
    "reset_default_validator",
    "valid",
    "validate",
    "with_alias_naming",
    "with_metadata_key",
]
