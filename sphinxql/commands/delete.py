"""Build a DELETE statement for one or more documents."""

from __future__ import annotations

import click

from sphinxql.cli import EXIT_SUCCESS, Context, pass_context
from sphinxql.commands._common import (
    _FORMAT_OPTION,
    _IDS_ARGUMENT,
    build_or_exit,
    emit_statement,
    id_argument,
)


@click.command("delete")
@_IDS_ARGUMENT
@_FORMAT_OPTION
@pass_context
def cli(ctx: Context, ids: tuple[int, ...], output_format: str) -> None:
    """Build a DELETE statement for the given IDs.

    \b
    Examples:
      sphinxql -i articles delete 5
      sphinxql -i articles delete 1 2 3 --format json
    """
    builder = ctx.builder()
    statement = build_or_exit(builder.delete, id_argument(ids))

    emit_statement(statement, output_format)
    raise SystemExit(EXIT_SUCCESS)
