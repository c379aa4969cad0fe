"""CLI tests for the select command."""

from __future__ import annotations

import json

from click.testing import CliRunner

from sphinxql.cli import Context
from sphinxql.commands.select import cli
from sphinxql.config import Config


def _make_ctx(index: str | None = "articles", **config_kwargs) -> Context:
    """Create a real Context with an in-memory config."""
    ctx = Context()
    ctx.config = Config(index=index, **config_kwargs)
    return ctx


def _invoke_json(args: list[str], ctx: Context | None = None) -> dict:
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [*args, "--format", "json"],
        obj=ctx or _make_ctx(),
        catch_exceptions=False,
    )
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestSelectCLI:
    def test_query_only(self) -> None:
        data = _invoke_json(["cats", "dogs"])
        assert data == {
            "sql": "SELECT * FROM articles WHERE MATCH(?)",
            "params": ["cats dogs"],
        }

    def test_no_query(self) -> None:
        data = _invoke_json([])
        assert data == {"sql": "SELECT * FROM articles", "params": []}

    def test_filters_order_and_paging(self) -> None:
        data = _invoke_json(
            [
                "cats",
                "-w",
                "views:>=100",
                "--where=-state:3",
                "-w",
                "tag:1,2",
                "-o",
                "views:desc",
                "-l",
                "20",
                "--offset",
                "40",
            ]
        )
        assert data["sql"] == (
            "SELECT * FROM articles WHERE MATCH(?) AND views >= ? AND state != ? "
            "AND tag IN(?, ?) ORDER BY views DESC LIMIT 40, 20"
        )
        assert data["params"] == ["cats", 100, 3, 1, 2]

    def test_relevance_order(self) -> None:
        data = _invoke_json(["-a", "id,title", "-o", "relevance", "cats"])
        assert data["sql"] == (
            "SELECT id, title, WEIGHT() AS relevance FROM articles "
            "WHERE MATCH(?) ORDER BY relevance ASC"
        )

    def test_config_relevance_expression(self) -> None:
        ctx = _make_ctx(relevance_expression="BM25A()")
        data = _invoke_json(["-o", "relevance:desc"], ctx)
        assert data["sql"] == (
            "SELECT *, BM25A() AS relevance FROM articles ORDER BY relevance DESC"
        )

    def test_group_and_condition(self) -> None:
        data = _invoke_json(["--group", "author_id", "--condition", "views > 10"])
        assert data["sql"] == "SELECT * FROM articles WHERE views > 10 GROUP BY author_id"

    def test_config_options_overridden_by_cli(self) -> None:
        ctx = _make_ctx(options={"max_matches": 500, "ranker": "bm25"})
        data = _invoke_json(["--option", "ranker=sph04"], ctx)
        assert data["sql"] == "SELECT * FROM articles OPTION max_matches = 500, ranker = sph04"

    def test_text_output(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["cats", "-w", "views:5"], obj=_make_ctx())
        assert result.exit_code == 0
        assert "SELECT * FROM articles WHERE MATCH(?) AND views = ?" in result.output
        assert "'cats'" in result.output

    def test_invalid_filter(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["-w", "views"], obj=_make_ctx())
        assert result.exit_code == 1
        assert "Failed to parse filter expression" in result.output

    def test_reserved_filter_attribute(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["-w", "limit:5"], obj=_make_ctx())
        assert result.exit_code == 1
        assert "Reserved name" in result.output

    def test_invalid_sort_direction(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["-o", "views:sideways"], obj=_make_ctx())
        assert result.exit_code == 1

    def test_invalid_option(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--option", "ranker"], obj=_make_ctx())
        assert result.exit_code == 1

    def test_no_index(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["cats"], obj=_make_ctx(index=None))
        assert result.exit_code == 1
        assert "No index selected" in result.output

    def test_index_from_context_overrides_config(self) -> None:
        ctx = _make_ctx()
        ctx.index = "posts"
        data = _invoke_json([], ctx)
        assert data["sql"] == "SELECT * FROM posts"
