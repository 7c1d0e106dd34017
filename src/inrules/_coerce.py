"""Value coercion — turn an opaque value into a requested primitive.

Every coercion follows the same order:
- the value already has the target type -> returned unchanged
- the value is a number -> widened/truncated into the target type
- anything else -> parsed from its textual form (``str(value)``)

Numeric parse failures raise NumericParseError. Boolean coercion never
raises: unrecognized values are simply False.
"""

from __future__ import annotations

from numbers import Number
from typing import Any

# Recognized (case-insensitive) truthy tokens for boolean coercion.
TRUE_TOKENS = frozenset({"t", "true", "y", "yes", "1", "+"})

SHORT_MIN, SHORT_MAX = -(2**15), 2**15 - 1
LONG_MIN, LONG_MAX = -(2**63), 2**63 - 1


class RuleError(Exception):
    """Base class for all errors raised while building or invoking rules."""


class MissingKeyError(RuleError, LookupError):
    """A keyed lookup found no value for the requested name."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"key {key!r} not found")


class TypeMismatchError(RuleError, TypeError):
    """A value could not be viewed as the requested type."""

    def __init__(self, expected: str, actual: Any) -> None:
        self.expected = expected
        self.actual = type(actual).__name__
        super().__init__(f"expected {expected}, got {self.actual}")


class NumericParseError(RuleError, ValueError):
    """A value could not be converted to the requested numeric type."""

    def __init__(self, value: Any, target: str, reason: str | None = None) -> None:
        self.value = value
        self.target = target
        msg = f"cannot convert {value!r} to {target}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


def cast[T](value: Any, cls: type[T]) -> T:
    """Checked reinterpretation of ``value`` as an instance of ``cls``.

    Raises:
        TypeMismatchError: If ``value`` is not an instance of ``cls``.
    """
    if not isinstance(value, cls):
        raise TypeMismatchError(cls.__name__, value)
    return value


def to_str(value: Any) -> str:
    """Textual coercion — the universal fallback."""
    return value if isinstance(value, str) else str(value)


def to_int(value: Any) -> int:
    # bool is an int subclass in Python, but is not a number here
    if isinstance(value, bool):
        return _parse_int(value, "int")
    if isinstance(value, int):
        return value
    if isinstance(value, Number):
        try:
            return int(value)  # type: ignore[call-overload]
        except (TypeError, ValueError, OverflowError) as e:
            raise NumericParseError(value, "int", str(e)) from e
    return _parse_int(value, "int")


def to_short(value: Any) -> int:
    """Coerce to an int within the signed 16-bit range."""
    return _bounded(to_int(value), "short", SHORT_MIN, SHORT_MAX)


def to_long(value: Any) -> int:
    """Coerce to an int within the signed 64-bit range."""
    return _bounded(to_int(value), "long", LONG_MIN, LONG_MAX)


def to_float(value: Any) -> float:
    if isinstance(value, float):
        return value
    if isinstance(value, Number) and not isinstance(value, bool):
        try:
            return float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError) as e:
            raise NumericParseError(value, "float", str(e)) from e
    text = to_str(value)
    if "_" in text:
        raise NumericParseError(value, "float", "digit separators are not accepted")
    try:
        return float(text)
    except ValueError as e:
        raise NumericParseError(value, "float") from e


# Python has a single double-precision float type.
to_double = to_float


def to_bool(value: Any) -> bool:
    """Coerce to bool using the recognized truthy tokens. Never raises."""
    if isinstance(value, bool):
        return value
    return to_str(value).lower() in TRUE_TOKENS


def _parse_int(value: Any, target: str) -> int:
    text = to_str(value)
    # int() would also take "1_000" and " 12 "; only plain signed digits parse
    if "_" in text or text != text.strip():
        raise NumericParseError(value, target)
    try:
        return int(text)
    except ValueError as e:
        raise NumericParseError(value, target) from e


def _bounded(value: int, target: str, low: int, high: int) -> int:
    if not low <= value <= high:
        msg = f"out of range [{low}, {high}]"
        raise NumericParseError(value, target, msg)
    return value
