"""SphinxQL statement construction."""

from sphinxql.query.builder import Statement, StatementBuilder
from sphinxql.query.comparison import (
    Between,
    Comparison,
    Equal,
    Greater,
    In,
    Less,
    Not,
    between,
    eq,
    gt,
    gte,
    in_,
    lt,
    lte,
    not_,
    resolve,
)
from sphinxql.query.filter_parser import parse_filter, parse_filters
from sphinxql.query.fragment import Fragment
from sphinxql.query.plan import QueryPlan, plan_query

__all__ = [
    "Between",
    "Comparison",
    "Equal",
    "Fragment",
    "Greater",
    "In",
    "Less",
    "Not",
    "QueryPlan",
    "Statement",
    "StatementBuilder",
    "between",
    "eq",
    "gt",
    "gte",
    "in_",
    "lt",
    "lte",
    "not_",
    "parse_filter",
    "parse_filters",
    "plan_query",
    "resolve",
]
