"""CLI tests for the insert, replace, update and delete commands."""

from __future__ import annotations

import json

import click
import pytest
from click.testing import CliRunner

from sphinxql.cli import Context
from sphinxql.commands import delete, insert, replace, update
from sphinxql.commands._common import id_argument, parse_value
from sphinxql.config import Config


def _make_ctx() -> Context:
    ctx = Context()
    ctx.config = Config(index="articles")
    return ctx


def _invoke_json(command: click.Command, args: list[str]) -> dict:
    runner = CliRunner()
    result = runner.invoke(
        command,
        [*args, "--format", "json"],
        obj=_make_ctx(),
        catch_exceptions=False,
    )
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestInsertCLI:
    def test_single(self) -> None:
        data = _invoke_json(insert.cli, ["1", "-s", 'title="x"', "-s", "tags=[1,2]"])
        assert data == {
            "sql": "INSERT INTO articles (title, tags, id) VALUES (?, (?, ?), ?)",
            "params": ["x", 1, 2, 1],
        }

    def test_several_ids(self) -> None:
        data = _invoke_json(insert.cli, ["1", "2", "-s", "state=0"])
        assert data == {
            "sql": "INSERT INTO articles (state, id) VALUES (?, ?), (?, ?)",
            "params": [0, 1, 0, 2],
        }

    def test_requires_attributes(self) -> None:
        runner = CliRunner()
        result = runner.invoke(insert.cli, ["1"], obj=_make_ctx())
        assert result.exit_code == 1
        assert "Nothing to insert" in result.output

    def test_invalid_assignment(self) -> None:
        runner = CliRunner()
        result = runner.invoke(insert.cli, ["1", "-s", "title"], obj=_make_ctx())
        assert result.exit_code == 1
        assert "Invalid assignment" in result.output


class TestReplaceCLI:
    def test_single(self) -> None:
        data = _invoke_json(replace.cli, ["9", "-s", "title=plain text"])
        assert data == {
            "sql": "REPLACE INTO articles (title, id) VALUES (?, ?)",
            "params": ["plain text", 9],
        }

    def test_requires_attributes(self) -> None:
        runner = CliRunner()
        result = runner.invoke(replace.cli, ["1"], obj=_make_ctx())
        assert result.exit_code == 1
        assert "Nothing to replace" in result.output

    def test_several_ids(self) -> None:
        data = _invoke_json(replace.cli, ["3", "4", "-s", "tags=[5]"])
        assert data == {
            "sql": "REPLACE INTO articles (tags, id) VALUES ((?), ?), ((?), ?)",
            "params": [5, 3, 5, 4],
        }


class TestUpdateCLI:
    def test_single(self) -> None:
        data = _invoke_json(update.cli, ["5", "-s", "status=active"])
        assert data == {
            "sql": "UPDATE articles SET status = ? WHERE id = ?",
            "params": ["active", 5],
        }

    def test_id_list(self) -> None:
        data = _invoke_json(update.cli, ["5", "6", "-s", "state=1"])
        assert data == {
            "sql": "UPDATE articles SET state = ? WHERE id IN(?, ?)",
            "params": [1, 5, 6],
        }

    def test_no_attributes(self) -> None:
        runner = CliRunner()
        result = runner.invoke(update.cli, ["5"], obj=_make_ctx())
        assert result.exit_code == 1
        assert "no attributes to set" in result.output


class TestDeleteCLI:
    def test_single(self) -> None:
        data = _invoke_json(delete.cli, ["7"])
        assert data == {"sql": "DELETE FROM articles WHERE id = ?", "params": [7]}

    def test_id_list(self) -> None:
        data = _invoke_json(delete.cli, ["1", "2", "3"])
        assert data == {"sql": "DELETE FROM articles WHERE id IN(?, ?, ?)", "params": [1, 2, 3]}

    def test_requires_ids(self) -> None:
        runner = CliRunner()
        result = runner.invoke(delete.cli, [], obj=_make_ctx())
        assert result.exit_code != 0

    def test_text_output(self) -> None:
        runner = CliRunner()
        result = runner.invoke(delete.cli, ["4"], obj=_make_ctx())
        assert result.exit_code == 0
        assert "DELETE FROM articles WHERE id = ?" in result.output


class TestHelpers:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("5", 5),
            ("2.5", 2.5),
            ("[1, 2]", [1, 2]),
            ('"quoted"', "quoted"),
            ("plain", "plain"),
            ("true", True),
        ],
    )
    def test_parse_value(self, raw: str, expected: object) -> None:
        assert parse_value(raw) == expected

    @pytest.mark.parametrize("raw", ["null", '{"a": 1}', "[[1]]"])
    def test_parse_value_rejects(self, raw: str) -> None:
        with pytest.raises(click.BadParameter):
            parse_value(raw)

    def test_id_argument(self) -> None:
        assert id_argument((3,)) == 3
        assert id_argument((3, 4)) == [3, 4]
