"""Configuration management for sphinxql."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from sphinxql.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)
from sphinxql.query.plan import DEFAULT_RELEVANCE_EXPRESSION

_OPTION_VALUE_TYPES = (str, int, float, bool, dict)

# SELECT ... OPTION names understood by Sphinx 2.x and Manticore.
KNOWN_OPTIONS: frozenset[str] = frozenset(
    {
        "agent_query_timeout",
        "boolean_simplify",
        "comment",
        "cutoff",
        "expand_keywords",
        "field_weights",
        "global_idf",
        "idf",
        "index_weights",
        "local_df",
        "max_matches",
        "max_predicted_time",
        "max_query_time",
        "ranker",
        "retry_count",
        "retry_delay",
        "reverse_scan",
        "sort_method",
        "threads",
    }
)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "sphinxql" / "config.toml"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        index: Default index statements target (overridden by --index).
        relevance_expression: Expression selected as ``relevance`` when a
            query orders by relevance without selecting it.
        options: Default OPTION entries applied to every SELECT.
        colored_output: Whether to use colored terminal output.
        config_path: Path where config was loaded from (None if defaults).
    """

    index: str | None = None
    relevance_expression: str = DEFAULT_RELEVANCE_EXPRESSION
    options: dict[str, Any] = field(default_factory=dict)
    colored_output: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        warnings: list[str] = []

        if not self.relevance_expression.strip():
            raise ConfigValidationError(
                "index.relevance_expression", self.relevance_expression, "must not be empty"
            )

        if self.index is not None and not self.index.strip():
            raise ConfigValidationError("index.name", self.index, "must not be empty")

        # Unknown options are passed through; the server has the final word
        for name in self.options:
            if name not in KNOWN_OPTIONS:
                warnings.append(f"options.{name} is not a known SELECT option")

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        # Use defaults
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: sphinxql init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    # Load from file
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [index] section
    index = data.get("index", {})
    if "name" in index:
        value = index["name"]
        if not isinstance(value, str):
            raise ConfigValidationError("index.name", value, "must be a string")
        config.index = value

    if "relevance_expression" in index:
        value = index["relevance_expression"]
        if not isinstance(value, str):
            raise ConfigValidationError("index.relevance_expression", value, "must be a string")
        config.relevance_expression = value

    # Parse [options] section
    options = data.get("options", {})
    if not isinstance(options, dict):
        raise ConfigValidationError("options", options, "must be a table")
    for name, value in options.items():
        if not isinstance(value, _OPTION_VALUE_TYPES):
            raise ConfigValidationError(
                f"options.{name}", value, "must be a string, number, boolean or table"
            )
        config.options[name] = value

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    # Ensure directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Build TOML structure (only non-default values)
    data: dict[str, Any] = {}

    index_data: dict[str, Any] = {}
    if config.index is not None:
        index_data["name"] = config.index
    if config.relevance_expression != DEFAULT_RELEVANCE_EXPRESSION:
        index_data["relevance_expression"] = config.relevance_expression
    if index_data:
        data["index"] = index_data

    if config.options:
        data["options"] = dict(config.options)

    if not config.colored_output:
        data["display"] = {"colored_output": False}

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
