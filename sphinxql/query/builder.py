"""Build SphinxQL statements and their positional bind values."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple

from sphinxql.exceptions import StatementError
from sphinxql.query.comparison import SET_TYPES, resolve
from sphinxql.query.fragment import Fragment
from sphinxql.query.plan import DEFAULT_RELEVANCE_EXPRESSION, QueryPlan, plan_query

logger = logging.getLogger(__name__)


class Statement(NamedTuple):
    """A SphinxQL statement and the values for its ``?`` placeholders."""

    sql: str
    params: list[Any]


def _value(value: Any) -> Fragment:
    """One attribute value: ``?``, or ``(?, ?)`` for a multi-value attribute."""
    if isinstance(value, SET_TYPES):
        return Fragment.tuple_of(value)
    return Fragment.bound("?", value)


def _format_option(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, Mapping):
        return "(" + ", ".join(f"{k}={v}" for k, v in value.items()) + ")"
    return str(value)


class StatementBuilder:
    """Constructs SphinxQL statements against a single index.

    The builder keeps no per-call state and can be shared freely.

    Values passed as filter values, attribute values and ids are always
    bound through placeholders. Everything else (attribute and column names,
    ``attrs``, ``group``, ``options`` and ``conditions``) is inserted into the
    statement text verbatim and must come from trusted code.
    """

    def __init__(
        self,
        index: str,
        relevance_expression: str = DEFAULT_RELEVANCE_EXPRESSION,
    ) -> None:
        """Initialize a builder for ``index``.

        Args:
            index: Name of the index statements target.
            relevance_expression: Expression selected as ``relevance`` when a
                query orders by relevance without selecting it.
        """
        self._index = index
        self._relevance_expression = relevance_expression

    @property
    def index(self) -> str:
        return self._index

    @property
    def relevance_expression(self) -> str:
        return self._relevance_expression

    def select(self, query: str | None, filters: Mapping[str, Any] | None = None) -> Statement:
        """Build a SELECT for the full-text ``query`` and ``filters``.

        Args:
            query: The full-text query to match (may be empty).
            filters: Attribute filters and the reserved keys ``attrs``,
                ``conditions``, ``group``, ``order``, ``limit``, ``offset``
                and ``options``.

        Returns:
            The statement and its bind values.

        Raises:
            UnsupportedFilterValueError: If a filter value cannot be compared.
        """
        return self.select_plan(plan_query(query, filters, self._relevance_expression))

    def select_plan(self, plan: QueryPlan) -> Statement:
        """Build a SELECT from an already normalized plan."""
        return self._statement(
            Fragment.join(
                [
                    self._from(plan),
                    self._where(plan),
                    self._group_by(plan),
                    self._order_by(plan),
                    self._limit(plan),
                    self._options(plan),
                ]
            )
        )

    def insert(self, id: Any, attributes: Any) -> Statement:
        """Build an INSERT for one document or a batch.

        ``id`` and ``attributes`` are either a single id and mapping, or
        equally long sequences of ids and mappings.
        """
        return self._into("INSERT", id, attributes)

    def replace(self, id: Any, attributes: Any) -> Statement:
        """Build a REPLACE for one document or a batch (see :meth:`insert`)."""
        return self._into("REPLACE", id, attributes)

    def update(self, id: Any, attributes: Mapping[str, Any]) -> Statement:
        """Build an UPDATE setting ``attributes`` on the document(s) ``id``."""
        if not attributes:
            raise StatementError("UPDATE", "no attributes to set")

        assignments = Fragment.join(
            [_value(value).prefix(f"{name} = ") for name, value in attributes.items()],
            ", ",
        )
        return self._statement(
            Fragment.join(
                [
                    Fragment(f"UPDATE {self._index} SET"),
                    assignments,
                    self._id_condition("UPDATE", id),
                ]
            )
        )

    def delete(self, id: Any) -> Statement:
        """Build a DELETE for the document(s) ``id``."""
        return self._statement(
            Fragment.join(
                [
                    Fragment(f"DELETE FROM {self._index}"),
                    self._id_condition("DELETE", id),
                ]
            )
        )

    # Clause builders

    def _from(self, plan: QueryPlan) -> Fragment:
        return Fragment(f"SELECT {', '.join(plan.fields)} FROM {self._index}")

    def _where(self, plan: QueryPlan) -> Fragment | None:
        parts: list[Fragment] = []
        if plan.match is not None:
            parts.append(Fragment.bound("MATCH(?)", plan.match))
        if plan.conditions is not None:
            parts.append(plan.conditions)
        for attr, comparison in plan.filters:
            parts.append(resolve(comparison).prefix(f"{attr} "))

        if not parts:
            return None
        return Fragment.join(parts, " AND ").prefix("WHERE ")

    def _group_by(self, plan: QueryPlan) -> Fragment | None:
        if plan.group is None:
            return None
        return Fragment(f"GROUP BY {plan.group}")

    def _order_by(self, plan: QueryPlan) -> Fragment | None:
        if not plan.order:
            return None
        return Fragment("ORDER BY " + ", ".join(f"{attr} {d}" for attr, d in plan.order))

    def _limit(self, plan: QueryPlan) -> Fragment | None:
        if plan.limit is None:
            return None
        return Fragment(f"LIMIT {plan.offset}, {plan.limit}")

    def _options(self, plan: QueryPlan) -> Fragment | None:
        if not plan.options:
            return None
        options = ", ".join(f"{name} = {_format_option(value)}" for name, value in plan.options)
        return Fragment(f"OPTION {options}")

    def _id_condition(self, statement: str, id: Any) -> Fragment:
        if isinstance(id, SET_TYPES):
            if not id:
                raise StatementError(statement, "empty id list")
            return Fragment.tuple_of(id).prefix("WHERE id IN")
        return Fragment.bound("WHERE id = ?", id)

    def _into(self, keyword: str, id: Any, attributes: Any) -> Statement:
        ids: Sequence[Any] = list(id) if isinstance(id, SET_TYPES) else [id]
        rows: Sequence[Mapping[str, Any]] = (
            list(attributes) if isinstance(attributes, SET_TYPES) else [attributes]
        )
        if not ids:
            raise StatementError(keyword, "no documents given")
        if len(ids) != len(rows):
            raise StatementError(keyword, f"{len(ids)} ids given for {len(rows)} attribute rows")

        # Column order is taken from the first row and applied to every row.
        columns = list(rows[0])
        values: list[Fragment] = []
        for doc_id, row in zip(ids, rows):
            if set(row) != set(columns):
                raise StatementError(
                    keyword,
                    f"attributes of document {doc_id!r} do not match columns {columns}",
                )
            values.append(
                Fragment.join(
                    [_value(row[column]) for column in columns] + [Fragment.bound("?", doc_id)],
                    ", ",
                ).wrap("(", ")")
            )

        column_list = ", ".join([str(c) for c in columns] + ["id"])
        return self._statement(
            Fragment.join(
                [
                    Fragment(f"{keyword} INTO {self._index} ({column_list}) VALUES"),
                    Fragment.join(values, ", "),
                ]
            )
        )

    def _statement(self, fragment: Fragment) -> Statement:
        logger.debug("Built statement: %s (%d bind values)", fragment.sql, len(fragment.binds))
        return Statement(fragment.sql, list(fragment.binds))
