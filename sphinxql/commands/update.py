"""Build an UPDATE statement for one or more documents."""

from __future__ import annotations

import click

from sphinxql.cli import EXIT_SUCCESS, Context, pass_context
from sphinxql.commands._common import (
    _FORMAT_OPTION,
    _IDS_ARGUMENT,
    _SET_OPTION,
    build_or_exit,
    emit_statement,
    id_argument,
    parse_assignments,
)


@click.command("update")
@_IDS_ARGUMENT
@_SET_OPTION
@_FORMAT_OPTION
@pass_context
def cli(
    ctx: Context,
    ids: tuple[int, ...],
    assignments: tuple[str, ...],
    output_format: str,
) -> None:
    """Build an UPDATE statement setting attributes on the given IDs.

    \b
    Examples:
      sphinxql -i articles update 5 -s state=1
      sphinxql -i articles update 5 6 7 -s tags='[3,4]'
    """
    builder = ctx.builder()
    attributes = parse_assignments(assignments)
    statement = build_or_exit(builder.update, id_argument(ids), attributes)

    emit_statement(statement, output_format)
    raise SystemExit(EXIT_SUCCESS)
