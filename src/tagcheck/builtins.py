"""Built-in constraint functions.

Each function has the signature ``(value, param) -> ConstraintError | None``.
Values arrive as stored on the member; ``None`` is the absent value.

- nonzero: value is not the zero value of its shape
- nonnil: value is not None
- len: length equals N
- min/max: numeric bound, or length bound for sized values
- regexp: string contains a match for the pattern
"""

import numbers
import re
from collections.abc import Mapping, Sequence, Set
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from tagcheck.types import ConstraintError, ErrorKind

# Shapes whose length is what len/min/max measure
_SIZED_TYPES = (str, bytes, bytearray, Sequence, Mapping, Set)


def _is_number(value: Any) -> bool:
    """Real numbers and Decimals; bool is deliberately excluded."""
    if isinstance(value, bool):
        return False
    return isinstance(value, (numbers.Real, Decimal))


def _is_sized(value: Any) -> bool:
    return isinstance(value, _SIZED_TYPES)


def _as_int(param: str) -> int:
    """Parse an integer literal; "0x10", "0b11", "0o17" and octal "017" are accepted."""
    try:
        return int(param, 0)
    except ValueError:
        if param.strip().lstrip("+-").startswith("0"):
            return int(param, 8)
        raise


def _as_bound(value: Any, param: str) -> Any:
    """Parse a bound parameter in the number system of the value."""
    if isinstance(value, Decimal):
        try:
            bound = Decimal(param)
        except InvalidOperation as exc:
            raise ValueError(param) from exc
        if not bound.is_finite():
            raise ValueError(param)
        return bound
    if isinstance(value, numbers.Integral):
        return _as_int(param)
    return float(param)


def _measure(value: Any, param: str) -> tuple[Any, Any]:
    """Return (measured, bound) for min/max.

    Raises:
        ConstraintError: UNSUPPORTED or BAD_PARAMETER
    """
    if not (_is_number(value) or _is_sized(value)):
        raise ConstraintError(ErrorKind.UNSUPPORTED)

    try:
        if _is_number(value):
            return value, _as_bound(value, param)
        return len(value), _as_int(param)
    except ValueError:
        raise ConstraintError(ErrorKind.BAD_PARAMETER) from None


# -----------------------------------------------------------------------------
# Constraint Functions
# -----------------------------------------------------------------------------


def nonzero(value: Any, param: str) -> ConstraintError | None:
    """Fail when the value equals the zero value of its shape.

    Records and other objects are never zero; only None is.
    """
    if value is None:
        valid = False
    elif isinstance(value, bool):
        valid = value
    elif isinstance(value, (numbers.Number, Decimal)):
        valid = value != 0
    elif _is_sized(value):
        valid = len(value) != 0
    else:
        valid = True

    if not valid:
        return ConstraintError(ErrorKind.ZERO_VALUE)
    return None


def nonnil(value: Any, param: str) -> ConstraintError | None:
    """Fail when the value is None.

    Any member can hold None, so no shape is reported as unsupported.
    """
    if value is None:
        return ConstraintError(ErrorKind.ZERO_VALUE)
    return None


def length(value: Any, param: str) -> ConstraintError | None:
    """Fail when the length of a sized value differs from N."""
    if value is None:
        return None
    if not _is_sized(value):
        return ConstraintError(ErrorKind.UNSUPPORTED)
    try:
        expected = _as_int(param)
    except ValueError:
        return ConstraintError(ErrorKind.BAD_PARAMETER)
    if len(value) != expected:
        return ConstraintError(ErrorKind.LEN)
    return None


def min_(value: Any, param: str) -> ConstraintError | None:
    """Fail when a number is below N, or a sized value is shorter than N."""
    if value is None:
        return None
    try:
        measured, bound = _measure(value, param)
    except ConstraintError as err:
        return err
    if measured < bound:
        return ConstraintError(ErrorKind.MIN)
    return None


def max_(value: Any, param: str) -> ConstraintError | None:
    """Fail when a number is above N, or a sized value is longer than N."""
    if value is None:
        return None
    try:
        measured, bound = _measure(value, param)
    except ConstraintError as err:
        return err
    if measured > bound:
        return ConstraintError(ErrorKind.MAX)
    return None


def regex(value: Any, param: str) -> ConstraintError | None:
    """Fail when a string contains no match for the pattern (not anchored)."""
    if value is None:
        return None
    if not isinstance(value, str):
        return ConstraintError(ErrorKind.UNSUPPORTED)
    try:
        pattern = re.compile(param)
    except re.error:
        return ConstraintError(ErrorKind.BAD_PARAMETER)
    if pattern.search(value) is None:
        return ConstraintError(ErrorKind.REGEXP)
    return None


BUILTIN_CONSTRAINTS: dict[str, Callable[[Any, str], ConstraintError | None]] = {
    "nonzero": nonzero,
    "nonnil": nonnil,
    "len": length,
    "min": min_,
    "max": max_,
    "regexp": regex,
}
