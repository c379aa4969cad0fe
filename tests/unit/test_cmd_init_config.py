"""Unit tests for the init-config command."""

from __future__ import annotations

import tomllib
from pathlib import Path

from click.testing import CliRunner

from sphinxql.commands.init_config import _load_example_config, cli
from sphinxql.config import load_config


class TestLoadExampleConfig:
    def test_loads_non_empty_content(self) -> None:
        content = _load_example_config()
        assert len(content) > 0

    def test_contains_all_sections(self) -> None:
        content = _load_example_config()
        for section in ("[index]", "[options]", "[display]"):
            assert section in content, f"Missing section {section}"

    def test_is_valid_toml(self) -> None:
        data = tomllib.loads(_load_example_config())
        assert data["index"]["relevance_expression"] == "WEIGHT()"


class TestInitConfigCommand:
    def test_creates_config_file(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["--output", "test-config.toml"], standalone_mode=False)
            assert result.exit_code == 0 or result.exception is None
            assert Path("test-config.toml").exists()
            content = Path("test-config.toml").read_text()
            assert "[index]" in content

    def test_created_file_matches_example(self) -> None:
        example = _load_example_config()
        runner = CliRunner()
        with runner.isolated_filesystem():
            runner.invoke(cli, ["--output", "test-config.toml"], standalone_mode=False)
            content = Path("test-config.toml").read_text()
            assert content == example

    def test_created_file_loads(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            runner.invoke(cli, ["--output", "test-config.toml"], standalone_mode=False)
            config, warnings = load_config(Path("test-config.toml"))
            assert config.index is None
            assert config.colored_output is True
            assert warnings == []

    def test_fails_if_exists_without_force(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("test-config.toml").write_text("existing")
            result = runner.invoke(cli, ["--output", "test-config.toml"])
            assert result.exit_code == 1
            assert Path("test-config.toml").read_text() == "existing"

    def test_force_overwrites(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("test-config.toml").write_text("existing")
            result = runner.invoke(cli, ["--output", "test-config.toml", "--force"])
            assert result.exit_code == 0
            assert Path("test-config.toml").read_text() == _load_example_config()
