"""Command-line interface for sphinxql."""

from __future__ import annotations

import os
from pathlib import Path

import click

from sphinxql import __version__
from sphinxql.config import Config, load_config
from sphinxql.exceptions import ConfigError
from sphinxql.query.builder import StatementBuilder
from sphinxql.utils.output import (
    error,
    set_color,
    set_verbosity,
    verbose,
    warning,
)

EXIT_SUCCESS = 0
EXIT_USAGE_ERROR = 1
EXIT_CONFIG_ERROR = 2


class Context:
    """Shared context for all commands."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.index: str | None = None
        self.quiet: bool = False

    def builder(self) -> StatementBuilder:
        """Return a statement builder for the selected index.

        Exits with a usage error when no index was configured or given.
        """
        index = self.index or (self.config.index if self.config else None)
        if not index:
            error("No index selected", hint="Pass --index or set [index] name in the config")
            raise SystemExit(EXIT_USAGE_ERROR)

        verbose(f"Index: {index}")
        if self.config is not None:
            return StatementBuilder(index, self.config.relevance_expression)
        return StatementBuilder(index)


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False, path_type=Path),
    help="Path to config file (default: ~/.config/sphinxql/config.toml)",
)
@click.option(
    "--index",
    "-i",
    default=None,
    help="Index to build statements for (overrides config)",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug output (implies --verbose)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress non-error output",
)
@click.version_option(version=__version__, prog_name="sphinxql")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    index: str | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
) -> None:
    """sphinxql: Build SphinxQL statements with positional bind values.

    Renders SELECT, INSERT, REPLACE, UPDATE and DELETE statements for a
    Sphinx/Manticore index, together with the values to bind to their
    placeholders.

    Configuration is loaded from ~/.config/sphinxql/config.toml by default.
    Use --config to specify an alternative configuration file.

    Examples:

        # Full-text search with an attribute filter
        sphinxql -i articles select "cats and dogs" -w "views:>100"

        # Delete a batch of documents
        sphinxql -i articles delete 1 2 3
    """
    # Initialize context
    ctx.ensure_object(Context)
    app_ctx = ctx.obj
    app_ctx.quiet = quiet
    app_ctx.index = index

    # Configure module-level verbosity for output helpers
    set_verbosity(verbose=verbose, debug=debug)

    # Configure color output: disabled by --no-color, NO_COLOR env, or config
    disable_color = no_color or os.environ.get("NO_COLOR") is not None

    if disable_color:
        set_color(False)

    # Load configuration
    try:
        loaded_config, warnings = load_config(config)
    except ConfigError as e:
        error(str(e))
        ctx.exit(EXIT_CONFIG_ERROR)
        return

    app_ctx.config = loaded_config

    # Apply config settings
    if not disable_color and not loaded_config.colored_output:
        set_color(False)

    # Show warnings unless quiet
    if not quiet:
        for warn in warnings:
            warning(warn)


@cli.command("help")
@click.argument("command", required=False, nargs=-1)
@click.pass_context
def help_cmd(ctx: click.Context, command: tuple[str, ...]) -> None:
    """Show help for a command."""
    group = cli
    # Resolve subcommand chain
    for name in command:
        cmd = group.get_command(ctx, name)
        if cmd is None:
            error(f"Unknown command: {name}")
            ctx.exit(EXIT_USAGE_ERROR)
            return
        if isinstance(cmd, click.Group):
            group = cmd
        else:
            click.echo(cmd.get_help(ctx))
            return
    # Print group help
    click.echo(group.get_help(ctx))


def register_commands() -> None:
    """Register all commands from the commands package."""
    from sphinxql.commands import discover_commands

    for command in discover_commands():
        cli.add_command(command)


# Register commands on import
register_commands()
