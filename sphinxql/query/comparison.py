"""Attribute comparisons: the shapes a filter value can take.

A filter value is classified into one of a closed set of variants:

    - ``Equal``: scalar equality (``= ?``)
    - ``In``: set membership (``IN(?, ?)``)
    - ``Between``: inclusive range (``BETWEEN ? AND ?``)
    - ``Greater`` / ``Less``: one-sided bounds (``> ?``, ``>= ?``, ``< ?``, ``<= ?``)
    - ``Not``: negation of any of the above

:func:`resolve` renders any variant (or a raw value, classified with
:func:`of`) into a :class:`~sphinxql.query.fragment.Fragment` whose text
is meant to follow the attribute name.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from sphinxql.exceptions import UnsupportedFilterValueError
from sphinxql.query.fragment import Fragment

SCALAR_TYPES: tuple[type, ...] = (str, bytes, int, float, Decimal, date)

SET_TYPES: tuple[type, ...] = (list, tuple, set, frozenset)

# (inclusive, negated) -> operator
_GREATER_OPERATORS: dict[tuple[bool, bool], str] = {
    (False, False): ">",
    (True, False): ">=",
    (False, True): "<=",
    (True, True): "<",
}
_LESS_OPERATORS: dict[tuple[bool, bool], str] = {
    (False, False): "<",
    (True, False): "<=",
    (False, True): ">=",
    (True, True): ">",
}


def is_scalar(value: Any) -> bool:
    """Return whether ``value`` can be bound to a single placeholder."""
    return isinstance(value, SCALAR_TYPES)


class Comparison:
    """Base class for all comparison variants."""

    __slots__ = ()


@dataclass(frozen=True)
class Equal(Comparison):
    value: Any

    def __post_init__(self) -> None:
        if not is_scalar(self.value):
            raise UnsupportedFilterValueError(self.value, "equality needs a scalar")


@dataclass(frozen=True)
class In(Comparison):
    values: tuple[Any, ...]

    def __post_init__(self) -> None:
        values = tuple(self.values)
        if not values:
            raise UnsupportedFilterValueError(self.values, "empty set")
        for item in values:
            if not is_scalar(item):
                raise UnsupportedFilterValueError(self.values, f"non-scalar member {item!r}")
        object.__setattr__(self, "values", values)


@dataclass(frozen=True)
class Between(Comparison):
    """Inclusive range. ``None`` on either side leaves that side open."""

    low: Any
    high: Any

    def __post_init__(self) -> None:
        if self.low is None and self.high is None:
            raise UnsupportedFilterValueError((self.low, self.high), "range has no bounds")
        for bound in (self.low, self.high):
            if bound is not None and not is_scalar(bound):
                raise UnsupportedFilterValueError(bound, "range bound must be a scalar")


@dataclass(frozen=True)
class Greater(Comparison):
    value: Any
    inclusive: bool = False

    def __post_init__(self) -> None:
        if not is_scalar(self.value):
            raise UnsupportedFilterValueError(self.value, "bound must be a scalar")


@dataclass(frozen=True)
class Less(Comparison):
    value: Any
    inclusive: bool = False

    def __post_init__(self) -> None:
        if not is_scalar(self.value):
            raise UnsupportedFilterValueError(self.value, "bound must be a scalar")


@dataclass(frozen=True)
class Not(Comparison):
    comparison: Any


def of(value: Any) -> Comparison:
    """Classify a raw filter value into a comparison variant.

    Args:
        value: A comparison, a ``range``, a list/tuple/set, or a scalar.

    Returns:
        The matching comparison variant.

    Raises:
        UnsupportedFilterValueError: If the value has no comparison shape.
    """
    if isinstance(value, Comparison):
        return value
    if isinstance(value, range):
        if len(value) == 0:
            raise UnsupportedFilterValueError(value, "empty range")
        if value.step == 1:
            return Between(value.start, value.stop - 1)
        return In(tuple(value))
    if isinstance(value, SET_TYPES):
        return In(tuple(value))
    if is_scalar(value):
        return Equal(value)
    raise UnsupportedFilterValueError(value)


def resolve(value: Any) -> Fragment:
    """Render a filter value as a comparison fragment plus its bind values."""
    return _render(of(value), negated=False)


def _render(comparison: Comparison, negated: bool) -> Fragment:
    if isinstance(comparison, Not):
        return _render(of(comparison.comparison), not negated)

    if isinstance(comparison, Equal):
        return Fragment.bound("!= ?" if negated else "= ?", comparison.value)

    if isinstance(comparison, In):
        return Fragment.tuple_of(comparison.values).prefix("NOT IN" if negated else "IN")

    if isinstance(comparison, Between):
        if comparison.low is None:
            return _render(Less(comparison.high, inclusive=True), negated)
        if comparison.high is None:
            return _render(Greater(comparison.low, inclusive=True), negated)
        keyword = "NOT BETWEEN" if negated else "BETWEEN"
        return Fragment.bound(f"{keyword} ? AND ?", comparison.low, comparison.high)

    if isinstance(comparison, Greater):
        op = _GREATER_OPERATORS[(comparison.inclusive, negated)]
        return Fragment.bound(f"{op} ?", comparison.value)

    if isinstance(comparison, Less):
        op = _LESS_OPERATORS[(comparison.inclusive, negated)]
        return Fragment.bound(f"{op} ?", comparison.value)

    raise UnsupportedFilterValueError(comparison)


# Shortcuts


def eq(value: Any) -> Equal:
    return Equal(value)


def in_(*values: Any) -> In:
    """Set membership. Accepts ``in_(1, 2, 3)`` or ``in_([1, 2, 3])``."""
    if len(values) == 1 and isinstance(values[0], SET_TYPES):
        values = tuple(values[0])
    return In(values)


def between(low: Any, high: Any) -> Between:
    return Between(low, high)


def gt(value: Any) -> Greater:
    return Greater(value)


def gte(value: Any) -> Greater:
    return Greater(value, inclusive=True)


def lt(value: Any) -> Less:
    return Less(value)


def lte(value: Any) -> Less:
    return Less(value, inclusive=True)


def not_(value: Any) -> Not:
    """Negate a comparison or a raw filter value."""
    return Not(of(value))
