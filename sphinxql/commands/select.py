"""Build a SELECT statement for a full-text query and attribute filters."""

from __future__ import annotations

from typing import Any

import click

from sphinxql.cli import EXIT_SUCCESS, EXIT_USAGE_ERROR, Context, pass_context
from sphinxql.commands._common import _FORMAT_OPTION, emit_statement
from sphinxql.exceptions import FilterParseError, UnsupportedFilterValueError
from sphinxql.query.filter_parser import parse_filters
from sphinxql.query.plan import RESERVED
from sphinxql.utils.output import debug, error


def _parse_order(items: tuple[str, ...]) -> list[tuple[str, str | None]]:
    """Parse ``attr`` / ``attr:desc`` / ``-attr`` order specs."""
    order: list[tuple[str, str | None]] = []
    for item in items:
        if item.startswith("-"):
            order.append((item[1:], "desc"))
            continue
        attr, _, direction = item.partition(":")
        direction = direction.lower() or None
        if direction not in (None, "asc", "desc"):
            error(f"Invalid sort direction: {direction}", hint="Use asc or desc")
            raise SystemExit(EXIT_USAGE_ERROR)
        order.append((attr, direction))
    return order


def _parse_options(items: tuple[str, ...]) -> dict[str, str]:
    options: dict[str, str] = {}
    for item in items:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            error(f"Invalid option: {item}", hint="Use NAME=VALUE")
            raise SystemExit(EXIT_USAGE_ERROR)
        options[name.strip()] = value.strip()
    return options


@click.command("select")
@click.argument("query", nargs=-1)
@click.option(
    "--where",
    "-w",
    "where",
    multiple=True,
    metavar="EXPR",
    help="Attribute filter, e.g. views:>100, id:1..10, tag:1,2,3, -state:3",
)
@click.option(
    "--attrs",
    "-a",
    default=None,
    help="Comma-separated list of fields to select (default: *)",
)
@click.option(
    "--order",
    "-o",
    multiple=True,
    metavar="ATTR[:DIR]",
    help="Sort attribute; prefix with - or suffix :desc for descending",
)
@click.option("--group", "-g", default=None, help="GROUP BY expression")
@click.option("--limit", "-l", type=int, default=None, help="Limit number of results")
@click.option("--offset", type=int, default=None, help="Skip this many results")
@click.option(
    "--option",
    "options",
    multiple=True,
    metavar="NAME=VALUE",
    help="OPTION entry (overrides the config's [options])",
)
@click.option(
    "--condition",
    default=None,
    help="Raw condition ANDed into the WHERE clause (inserted verbatim)",
)
@_FORMAT_OPTION
@pass_context
def cli(
    ctx: Context,
    query: tuple[str, ...],
    where: tuple[str, ...],
    attrs: str | None,
    order: tuple[str, ...],
    group: str | None,
    limit: int | None,
    offset: int | None,
    options: tuple[str, ...],
    condition: str | None,
    output_format: str,
) -> None:
    """Build a SELECT statement.

    QUERY is the full-text query; multiple arguments are joined with
    spaces. It may be omitted to filter on attributes only.

    \b
    Examples:
      sphinxql -i articles select "cats dogs"
      sphinxql -i articles select cats -w "views:>=100" -o views:desc -l 20
      sphinxql -i articles select -a title -o relevance cats
      sphinxql -i articles select -w "-state:3" -w "tag:1,2" --option ranker=bm25
    """
    builder = ctx.builder()

    try:
        filters: dict[str, Any] = dict(parse_filters(where))
    except FilterParseError as e:
        error(str(e))
        raise SystemExit(EXIT_USAGE_ERROR)

    reserved = sorted(RESERVED.intersection(filters))
    if reserved:
        error(
            f"Reserved name used as filter attribute: {', '.join(reserved)}",
            hint="Use the corresponding option instead",
        )
        raise SystemExit(EXIT_USAGE_ERROR)

    if attrs:
        filters["attrs"] = [a.strip() for a in attrs.split(",") if a.strip()]
    if condition:
        filters["conditions"] = condition
    if group:
        filters["group"] = group
    if order:
        filters["order"] = _parse_order(order)
    if limit is not None:
        filters["limit"] = limit
    if offset is not None:
        filters["offset"] = offset

    merged_options: dict[str, Any] = dict(ctx.config.options) if ctx.config else {}
    merged_options.update(_parse_options(options))
    if merged_options:
        filters["options"] = merged_options

    debug(f"Filters: {filters!r}")

    try:
        statement = builder.select(" ".join(query), filters)
    except UnsupportedFilterValueError as e:
        error(str(e))
        raise SystemExit(EXIT_USAGE_ERROR)

    emit_statement(statement, output_format)
    raise SystemExit(EXIT_SUCCESS)
