"""Rule constructors: the leaves of the validation algebra.

Every constructor takes its parameters once and returns a rule, a callable of
``(value, fields=None)`` that yields ``False`` when the value passes or an
:class:`~dataknobs_revalid.descriptors.ErrorDescriptor` when it fails.
Rules never raise on bad input; a value of the wrong kind is an ordinary
failure. Bad rule parameters are rejected up front with
:class:`~dataknobs_revalid.exceptions.RuleConfigurationError`.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable, Mapping
from decimal import Decimal
from fractions import Fraction
from re import Pattern as RegexPattern
from typing import Any, Literal, Union

from .descriptors import (
    EqualToError,
    ErrorDescriptor,
    MatchesFieldError,
    MaxError,
    MaxLengthError,
    MinError,
    MinLengthError,
    OneOfError,
    PatternError,
)
from .exceptions import RuleConfigurationError

Fields = Mapping[str, Any]
RuleResult = Union[ErrorDescriptor, Literal[False]]
Rule = Callable[..., RuleResult]

PASS: Literal[False] = False

_NUMERIC_TYPES = (int, float, Decimal, Fraction)


def is_empty(value: Any) -> bool:
    """Return True for the values treated as "absent": None and the empty string."""
    return value is None or (isinstance(value, str) and value == "")


def strictly_equal(a: Any, b: Any) -> bool:
    """Equality without cross-type coercion (``1`` is not ``True``, ``1.0`` or ``"1"``)."""
    return type(a) is type(b) and a == b


def to_finite_number(value: Any) -> float | None:
    """Parse a value as a finite number.

    Args:
        value: Candidate value (number or numeric string)

    Returns:
        The value as a float, or None if it is not numeric, NaN or infinite
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        # float() accepts digit separators; numeric input does not
        if "_" in value:
            return None
    elif not isinstance(value, _NUMERIC_TYPES):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _check_length_bound(name: str, n: Any) -> None:
    if isinstance(n, bool) or not isinstance(n, int):
        raise RuleConfigurationError(
            f"{name} requires an integer length, got {type(n).__name__}",
            context={"rule": name, "n": n},
        )
    if n < 0:
        raise RuleConfigurationError(
            f"{name} length cannot be negative: {n}",
            context={"rule": name, "n": n},
        )


def _check_threshold(name: str, n: Any) -> None:
    if (
        isinstance(n, bool)
        or not isinstance(n, _NUMERIC_TYPES)
        or (isinstance(n, float) and math.isnan(n))
        or (isinstance(n, Decimal) and n.is_nan())
    ):
        raise RuleConfigurationError(
            f"{name} requires a numeric threshold, got {n!r}",
            context={"rule": name, "n": n},
        )


def _length_of(value: Any) -> int | None:
    if is_empty(value):
        return None
    try:
        return len(value)
    except TypeError:
        return None


def min_length(n: int) -> Rule:
    """Value must be non-empty with ``len(value) >= n``.

    Empty values fail; wrap with ``optional`` to skip them instead.
    """
    _check_length_bound("min_length", n)

    def rule(value: Any, fields: Fields | None = None) -> RuleResult:
        length = _length_of(value)
        if length is not None and length >= n:
            return PASS
        return MinLengthError(value=value, min_length=n)

    return rule


def max_length(n: int) -> Rule:
    """Value must be non-empty with ``len(value) <= n``."""
    _check_length_bound("max_length", n)

    def rule(value: Any, fields: Fields | None = None) -> RuleResult:
        length = _length_of(value)
        if length is not None and length <= n:
            return PASS
        return MaxLengthError(value=value, max_length=n)

    return rule


def min_value(n: float) -> Rule:
    """Value must parse as a finite number ``>= n``."""
    _check_threshold("min_value", n)

    def rule(value: Any, fields: Fields | None = None) -> RuleResult:
        number = to_finite_number(value)
        if number is not None and number >= n:
            return PASS
        return MinError(value=value, min=n)

    return rule


def max_value(n: float) -> Rule:
    """Value must parse as a finite number ``<= n``."""
    _check_threshold("max_value", n)

    def rule(value: Any, fields: Fields | None = None) -> RuleResult:
        number = to_finite_number(value)
        if number is not None and number <= n:
            return PASS
        return MaxError(value=value, max=n)

    return rule


def pattern(expr: str | RegexPattern[str], label: str | None = None) -> Rule:
    """Value must contain a match for ``expr`` (search semantics).

    Args:
        expr: Regular expression, as a string or compiled pattern
        label: Caller-supplied name for the pattern, carried into the error

    Returns:
        Rule that fails with a ``pattern`` descriptor when nothing matches
    """
    if isinstance(expr, str):
        try:
            regex = re.compile(expr)
        except re.error as e:
            raise RuleConfigurationError(
                f"Invalid pattern {expr!r}: {e}",
                context={"rule": "pattern", "pattern": expr, "label": label},
            ) from e
    elif isinstance(expr, RegexPattern):
        if isinstance(expr.pattern, bytes):
            raise RuleConfigurationError(
                f"pattern requires a str regex, got bytes pattern {expr.pattern!r}",
                context={"rule": "pattern", "label": label},
            )
        regex = expr
    else:
        raise RuleConfigurationError(
            f"pattern requires a string or compiled regex, got {type(expr).__name__}",
            context={"rule": "pattern", "label": label},
        )

    def rule(value: Any, fields: Fields | None = None) -> RuleResult:
        if value is not None:
            text = value if isinstance(value, str) else str(value)
            if regex.search(text):
                return PASS
        return PatternError(value=value, label=label, pattern=regex)

    return rule


def equal_to(other: Any) -> Rule:
    """Value must strictly equal ``other``."""

    def rule(value: Any, fields: Fields | None = None) -> RuleResult:
        if strictly_equal(value, other):
            return PASS
        return EqualToError(value=value, other=other)

    return rule


def one_of(values: Iterable[Any]) -> Rule:
    """Value must strictly equal one of ``values``."""
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise RuleConfigurationError(
            f"one_of requires a sequence of allowed values, got {type(values).__name__}",
            context={"rule": "one_of"},
        )
    allowed = tuple(values)

    def rule(value: Any, fields: Fields | None = None) -> RuleResult:
        if any(strictly_equal(value, candidate) for candidate in allowed):
            return PASS
        return OneOfError(value=value, values=allowed)

    return rule


def matches_field(field_name: str) -> Rule:
    """Value must strictly equal the record's ``field_name`` value.

    A missing field reads as None; so does every field when no record is given.
    """
    if not isinstance(field_name, str):
        raise RuleConfigurationError(
            f"matches_field requires a field name, got {type(field_name).__name__}",
            context={"rule": "matches_field"},
        )

    def rule(value: Any, fields: Fields | None = None) -> RuleResult:
        other = fields.get(field_name) if fields is not None else None
        if strictly_equal(value, other):
            return PASS
        return MatchesFieldError(value=value, field_name=field_name, other=other)

    return rule
