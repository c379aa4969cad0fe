"""Initialize configuration file for sphinxql."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import click

from sphinxql.cli import EXIT_USAGE_ERROR, Context, pass_context
from sphinxql.config import get_default_config_path
from sphinxql.utils.fileops import secure_mkdir
from sphinxql.utils.output import error, info, success


def _load_example_config() -> str:
    """Load the example configuration from package data."""
    return resources.files("sphinxql").joinpath("config.example.toml").read_text()


@click.command("init-config")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Overwrite existing config file",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output path for config file (default: ~/.config/sphinxql/config.toml)",
)
@pass_context
def cli(ctx: Context, force: bool, output: Path | None) -> None:
    """Create a new configuration file with default settings.

    Creates a configuration file at the default location
    (~/.config/sphinxql/config.toml) or at a custom path
    specified with --output.

    Examples:

    \b
      # Create config at default location
      sphinxql init-config

    \b
      # Create config at custom location
      sphinxql init-config --output ./my-config.toml

    \b
      # Overwrite existing config
      sphinxql init-config --force
    """
    config_path = output if output is not None else get_default_config_path()
    config_path = config_path.expanduser().resolve()

    if config_path.exists() and not force:
        error(
            f"Config file already exists: {config_path}",
            hint="Use --force to overwrite",
        )
        raise SystemExit(EXIT_USAGE_ERROR)

    # Ensure parent directory exists with secure permissions
    secure_mkdir(config_path.parent)

    # Load config content from the package example (single source of truth)
    config_content = _load_example_config()

    try:
        config_path.write_text(config_content)
        config_path.chmod(0o600)
    except OSError as e:
        error(f"Failed to write config file: {e}")
        raise SystemExit(EXIT_USAGE_ERROR)

    success(f"Created config file: {config_path}")
    info("Set [index] name to choose the default index.")
