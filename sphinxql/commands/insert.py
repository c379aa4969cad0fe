"""Build an INSERT statement for one or more documents."""

from __future__ import annotations

import click

from sphinxql.cli import Context, pass_context
from sphinxql.commands._common import _FORMAT_OPTION, _IDS_ARGUMENT, _SET_OPTION, run_into


@click.command("insert")
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
    """Build an INSERT statement.

    Every ID becomes one row carrying the same attribute values.

    \b
    Examples:
      sphinxql -i articles insert 1 -s title='"Hello"' -s tags='[1,2]'
      sphinxql -i articles insert 1 2 3 -s state=0
    """
    run_into(ctx, "INSERT", ids, assignments, output_format)
