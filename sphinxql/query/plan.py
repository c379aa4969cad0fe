"""Normalize a filter description into an immutable query plan.

The filter description is a plain mapping. A handful of keys are reserved
(see ``RESERVED``); every other key names an attribute filter. The mapping is
only read: nothing is removed from it and no reference to it is kept.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from sphinxql.exceptions import UnsupportedFilterValueError
from sphinxql.query.comparison import Comparison, of
from sphinxql.query.fragment import Fragment

RESERVED: frozenset[str] = frozenset(
    {
        "attrs",
        "limit",
        "offset",
        "order",
        "options",
        "group",
        "conditions",
    }
)

RELEVANCE = "relevance"
DEFAULT_RELEVANCE_EXPRESSION = "WEIGHT()"

_RELEVANCE_PATTERN = re.compile(rf"\b{RELEVANCE}\b")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class QueryPlan:
    """Everything a SELECT needs, already normalized.

    Attributes:
        fields: Select list, including a synthetic relevance field if needed.
        match: Full-text query, or None when the query is empty.
        conditions: Verbatim condition fragment with its binds.
        filters: ``(attribute, comparison)`` pairs in filter order.
        group: Verbatim GROUP BY expression.
        order: ``(attribute, DIRECTION)`` pairs.
        limit: Row limit, or None when no LIMIT clause is wanted.
        offset: Row offset (only used together with ``limit``).
        options: ``(name, raw value)`` pairs for the OPTION clause.
    """

    fields: tuple[str, ...] = ("*",)
    match: str | None = None
    conditions: Fragment | None = None
    filters: tuple[tuple[str, Comparison], ...] = ()
    group: str | None = None
    order: tuple[tuple[str, str], ...] = ()
    limit: int | None = None
    offset: int = 0
    options: tuple[tuple[str, Any], ...] = ()


def coerce_int(value: Any) -> int:
    """Leniently convert ``value`` to an int.

    Strings use their leading integer (``"10abc"`` -> 10); anything that has
    no integer reading, including None, becomes 0.
    """
    if isinstance(value, int):
        return int(value)
    if isinstance(value, (float, Decimal)):
        try:
            return int(value)
        except (OverflowError, ValueError):
            return 0
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0


def normalize_order(order: Any) -> tuple[tuple[str, str], ...]:
    """Normalize an ``order`` value to ``(attribute, DIRECTION)`` pairs.

    Accepts a mapping ``{attr: direction}``, a sequence of ``(attr, direction)``
    pairs or bare attribute names, or a single attribute name. A missing
    direction means ascending. Repeated attributes keep their first position
    and their last direction.
    """
    if order is None:
        return ()
    if isinstance(order, str):
        items: list[Any] = [order]
    elif isinstance(order, Mapping):
        items = list(order.items())
    elif isinstance(order, (list, tuple)):
        items = list(order)
    else:
        raise UnsupportedFilterValueError(order, "order must be a name, mapping or sequence")

    normalized: dict[str, str] = {}
    for item in items:
        if isinstance(item, str):
            attr, direction = item, None
        elif isinstance(item, (list, tuple)) and item:
            attr = item[0]
            direction = item[1] if len(item) > 1 else None
        else:
            raise UnsupportedFilterValueError(
                item, "order entries must be a name or an (attr, direction) pair"
            )
        normalized[str(attr)] = str(direction or "asc").upper()
    return tuple(normalized.items())


def normalize_fields(
    attrs: Any,
    order: tuple[tuple[str, str], ...],
    relevance_expression: str = DEFAULT_RELEVANCE_EXPRESSION,
) -> tuple[str, ...]:
    """Build the select list, adding a relevance field when ordering needs it."""
    if attrs is None:
        fields = ["*"]
    elif isinstance(attrs, str):
        fields = [attrs]
    else:
        fields = [str(a) for a in attrs] or ["*"]

    orders_by_relevance = any(attr == RELEVANCE for attr, _ in order)
    if orders_by_relevance and not any(_RELEVANCE_PATTERN.search(f) for f in fields):
        fields.append(f"{relevance_expression} AS {RELEVANCE}")
    return tuple(fields)


def normalize_conditions(conditions: Any) -> Fragment | None:
    """Turn a ``conditions`` entry into a fragment.

    Either a bare SQL string, or a sequence whose first item is the SQL and
    whose remaining items are its bind values.
    """
    if conditions is None:
        return None
    if isinstance(conditions, Fragment):
        return conditions
    if isinstance(conditions, str):
        return Fragment(conditions)
    if isinstance(conditions, (list, tuple)) and conditions and isinstance(conditions[0], str):
        return Fragment.bound(conditions[0], *conditions[1:])
    raise UnsupportedFilterValueError(
        conditions, "conditions must be a string or a (sql, *binds) sequence"
    )


def normalize_options(options: Any) -> tuple[tuple[str, Any], ...]:
    """Turn the ``options`` entry into ``(name, value)`` pairs.

    Options whose value is None are left out.
    """
    if not options:
        return ()
    try:
        items = dict(options).items()
    except (TypeError, ValueError) as e:
        raise UnsupportedFilterValueError(
            options, "options must be a mapping or a sequence of (name, value) pairs"
        ) from e
    return tuple((str(k), v) for k, v in items if v is not None)


def plan_query(
    query: str | None,
    filters: Mapping[str, Any] | None = None,
    relevance_expression: str = DEFAULT_RELEVANCE_EXPRESSION,
) -> QueryPlan:
    """Normalize a full-text query and filter description into a QueryPlan.

    Args:
        query: Full-text query; empty or None means no MATCH predicate.
        filters: Filter description (see module docstring). Not modified.
        relevance_expression: Expression used for the synthetic relevance field.

    Returns:
        An immutable QueryPlan.

    Raises:
        UnsupportedFilterValueError: If an attribute filter value, or the
            ``conditions``, ``order`` or ``options`` entry, has no
            recognizable shape.
    """
    filters = filters or {}

    order = normalize_order(filters.get("order"))
    group = filters.get("group")

    return QueryPlan(
        fields=normalize_fields(filters.get("attrs"), order, relevance_expression),
        match=query or None,
        conditions=normalize_conditions(filters.get("conditions")),
        filters=tuple(
            (str(key), of(value)) for key, value in filters.items() if str(key) not in RESERVED
        ),
        group=str(group) if group not in (None, "") else None,
        order=order,
        limit=coerce_int(filters["limit"]) if "limit" in filters else None,
        offset=coerce_int(filters.get("offset")),
        options=normalize_options(filters.get("options")),
    )
