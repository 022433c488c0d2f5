"""Core types for the tagcheck validation system.

This module defines the error model shared by every layer:
- ErrorKind: the semantic failure categories
- ConstraintError: one failure produced by one constraint
- ErrorList: the ordered failures for one value (leaf report)
- ErrorMap: path -> ErrorList for a whole traversal
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable


class ErrorKind(Enum):
    """Failure categories. The value is the default message."""

    ZERO_VALUE = "zero value"
    LEN = "invalid length"
    MIN = "less than min"
    MAX = "greater than max"
    REGEXP = "regular expression mismatch"
    UNSUPPORTED = "unsupported type"
    BAD_PARAMETER = "bad parameter"
    UNKNOWN_TAG = "unknown tag"
    CANNOT_VALIDATE = "cannot validate private embedded value"
    INVALID = "invalid value"


class ConstraintError(Exception):
    """A single constraint failure.

    Constraint functions either return one of these or raise it; both are
    recorded the same way.

    Attributes:
        kind: Semantic category of the failure
        message: Human-readable message (defaults to the kind's message)
    """

    def __init__(self, kind: ErrorKind = ErrorKind.INVALID, message: str | None = None):
        self.kind = kind
        self.message = message or kind.value
        super().__init__(self.message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConstraintError):
            return NotImplemented
        return self.kind == other.kind and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.kind, self.message))

    def __repr__(self) -> str:
        return f"ConstraintError({self.kind.name}, {self.message!r})"

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.kind.name, "message": self.message}


class ErrorList(list):
    """Ordered failures for one concrete value, in constraint order."""

    def kinds(self) -> list[ErrorKind]:
        return [err.kind for err in self]

    def has(self, kind: ErrorKind) -> bool:
        """Check if any failure in the list is of the given kind."""
        return any(err.kind == kind for err in self)

    def __str__(self) -> str:
        return ", ".join(str(err) for err in self)

    def to_list(self) -> list[dict[str, Any]]:
        return [err.to_dict() for err in self]


class ErrorMap(dict):
    """Failures of a whole traversal, keyed by the path of each value.

    Keys appear in depth-first discovery order. Only paths that failed are
    present.
    """

    def __str__(self) -> str:
        return ", ".join(f"{path}: {errs}" for path, errs in self.items() if errs)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {path: errs.to_list() for path, errs in self.items()}


class ConfigurationError(ValueError):
    """Invalid validator configuration (bad registration, bad settings)."""
    pass


class ValidationFailed(Exception):
    """Raised by ensure_valid() when a value has at least one failure."""

    def __init__(self, errors: ErrorMap):
        self.errors = errors
        super().__init__(str(errors))


@dataclass(frozen=True)
class ConstraintSpec:
    """One parsed constraint: a name and its raw (possibly empty) parameter."""

    name: str
    param: str = ""


# Checking function signature: (value, param) -> ConstraintError | None
ConstraintFunc = Callable[[Any, str], ConstraintError | None]
