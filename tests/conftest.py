"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from sphinxql.query.builder import StatementBuilder
from sphinxql.utils.output import set_verbosity

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""[index]
name = "articles"

[options]
max_matches = 500
ranker = "bm25"

[display]
colored_output = false
""")
    return config_path


@pytest.fixture
def builder() -> StatementBuilder:
    """A statement builder for the ``articles`` index."""
    return StatementBuilder("articles")


@pytest.fixture(autouse=True)
def reset_verbosity() -> Generator[None, None, None]:
    """Verbosity flags are module-level; keep one CLI run from leaking into the next."""
    yield
    set_verbosity()
