"""Shared options and helpers for statement commands."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Callable

import click

from sphinxql.cli import EXIT_SUCCESS, EXIT_USAGE_ERROR
from sphinxql.exceptions import BuilderError
from sphinxql.query.builder import Statement
from sphinxql.utils.output import error, print_statement

if TYPE_CHECKING:
    from sphinxql.cli import Context

# Shared options for statement commands
_FORMAT_OPTION = click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text)",
)
_SET_OPTION = click.option(
    "--set",
    "-s",
    "assignments",
    multiple=True,
    metavar="COLUMN=VALUE",
    help="Attribute value; VALUE is read as JSON when possible (e.g. 5, [1,2])",
)
_IDS_ARGUMENT = click.argument("ids", nargs=-1, type=int, required=True)


def emit_statement(statement: Statement, output_format: str) -> None:
    """Write a statement in the requested output format."""
    if output_format == "json":
        click.echo(json.dumps({"sql": statement.sql, "params": statement.params}, default=str))
    else:
        print_statement(statement)


def parse_value(raw: str) -> Any:
    """Decode an attribute value given on the command line.

    Numbers, strings and lists of those are read as JSON; anything that is
    not valid JSON is kept as a plain string.
    """
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return raw
    if value is None or isinstance(value, dict):
        raise click.BadParameter(f"unsupported attribute value: {raw}")
    if isinstance(value, list) and any(isinstance(v, (list, dict)) or v is None for v in value):
        raise click.BadParameter(f"multi-value attributes must be flat: {raw}")
    return value


def parse_assignments(assignments: tuple[str, ...]) -> dict[str, Any]:
    """Parse ``COLUMN=VALUE`` pairs, keeping their order."""
    attributes: dict[str, Any] = {}
    for item in assignments:
        column, sep, raw = item.partition("=")
        column = column.strip()
        if not sep or not column:
            error(f"Invalid assignment: {item}", hint="Use COLUMN=VALUE")
            raise SystemExit(EXIT_USAGE_ERROR)
        try:
            attributes[column] = parse_value(raw)
        except click.BadParameter as e:
            error(str(e.message))
            raise SystemExit(EXIT_USAGE_ERROR)
    return attributes


def id_argument(ids: tuple[int, ...]) -> int | list[int]:
    """A single id stays scalar; several become an id list."""
    if len(ids) == 1:
        return ids[0]
    return list(ids)


def build_or_exit(build: Callable[..., Statement], *args: Any) -> Statement:
    """Call a builder method, reporting builder errors as a usage error."""
    try:
        return build(*args)
    except BuilderError as e:
        error(str(e))
        raise SystemExit(EXIT_USAGE_ERROR)


def run_into(
    ctx: Context,
    keyword: str,
    ids: tuple[int, ...],
    assignments: tuple[str, ...],
    output_format: str,
) -> None:
    """Shared body of the ``insert`` and ``replace`` commands.

    Every ID becomes one row carrying the same attribute values. Always
    exits: with EXIT_SUCCESS after emitting the statement, or with a usage
    error when nothing was given to store.
    """
    builder = ctx.builder()
    attributes = parse_assignments(assignments)
    if not attributes:
        error(f"Nothing to {keyword.lower()}", hint="Give at least one --set COLUMN=VALUE")
        raise SystemExit(EXIT_USAGE_ERROR)

    build = builder.insert if keyword == "INSERT" else builder.replace
    rows = [dict(attributes) for _ in ids]
    statement = build_or_exit(build, list(ids), rows)

    emit_statement(statement, output_format)
    raise SystemExit(EXIT_SUCCESS)
