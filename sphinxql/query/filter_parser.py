"""Parse compact attribute filter expressions into comparisons."""

from __future__ import annotations

import re
from collections.abc import Iterable
from importlib import resources
from typing import Any

from lark import Lark, Token, Transformer, UnexpectedInput

from sphinxql.exceptions import FilterParseError
from sphinxql.query.comparison import (
    Between,
    Comparison,
    Equal,
    Greater,
    In,
    Less,
    Not,
)

_INT_PATTERN = re.compile(r"[+-]?\d+")
_FLOAT_PATTERN = re.compile(r"[+-]?(\d+\.\d*|\.\d+)([eE][+-]?\d+)?")


def _load_grammar() -> str:
    """Load the Lark grammar from the package resources."""
    return resources.files("sphinxql.query").joinpath("filter.lark").read_text()


_GRAMMAR_TEXT = _load_grammar()

_parser = Lark(
    _GRAMMAR_TEXT,
    parser="earley",
    ambiguity="resolve",
)


def coerce_scalar(raw: str) -> Any:
    """Read a bare token as an int or float when it looks like one."""
    if _INT_PATTERN.fullmatch(raw):
        return int(raw)
    if _FLOAT_PATTERN.fullmatch(raw):
        return float(raw)
    return raw


class _FilterTransformer(Transformer):
    """Transform a Lark parse tree into an ``(attribute, comparison)`` pair."""

    def start(self, items: list[Any]) -> tuple[str, Comparison]:
        return items[0]

    def filter(self, items: list[Any]) -> tuple[str, Comparison]:
        # Optional NEGATE token, then field name, then comparison
        field_name = str(items[-2])
        comparison = items[-1]
        if len(items) == 3:
            comparison = Not(comparison)
        return field_name, comparison

    def comparison_value(self, items: list[Any]) -> Comparison:
        op = str(items[0])
        value = items[1]
        if op.startswith(">"):
            return Greater(value, inclusive=op == ">=")
        return Less(value, inclusive=op == "<=")

    def range_value(self, items: list[Any]) -> Between:
        return Between(items[0], items[1])

    def set_value(self, items: list[Any]) -> In:
        return In(tuple(items))

    def exact_value(self, items: list[Any]) -> Equal:
        return Equal(items[0])

    def quoted(self, items: list[Any]) -> str:
        raw = str(items[0])
        # Strip surrounding quotes
        if raw.startswith('"') and raw.endswith('"'):
            return raw[1:-1]
        return raw

    def bare(self, items: list[Any]) -> Any:
        return coerce_scalar(str(items[0]))

    def FIELD_NAME(self, token: Token) -> str:
        return str(token)


_transformer = _FilterTransformer()


def parse_filter(expression: str) -> tuple[str, Comparison]:
    """Parse one filter expression such as ``views:>=100``.

    Args:
        expression: The filter expression to parse.

    Returns:
        The attribute name and its comparison.

    Raises:
        FilterParseError: If the expression cannot be parsed.
    """
    expression = expression.strip()
    if not expression:
        raise FilterParseError(expression, "empty expression")

    try:
        tree = _parser.parse(expression)
        return _transformer.transform(tree)
    except UnexpectedInput as e:
        raise FilterParseError(expression, str(e)) from e


def parse_filters(expressions: Iterable[str]) -> dict[str, Comparison]:
    """Parse several filter expressions into an attribute filter mapping.

    A later expression for the same attribute replaces an earlier one.
    """
    filters: dict[str, Comparison] = {}
    for expression in expressions:
        attr, comparison = parse_filter(expression)
        filters[attr] = comparison
    return filters
