"""SQL text paired with the bind values its placeholders consume."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

PLACEHOLDER = "?"


def placeholders(count: int) -> str:
    """Return ``count`` comma-separated placeholders, e.g. ``?, ?, ?``."""
    return ", ".join([PLACEHOLDER] * count)


@dataclass(frozen=True)
class Fragment:
    """A piece of SphinxQL together with the values bound to its ``?`` marks.

    Fragments are only ever combined through :meth:`join` and :meth:`prefix`,
    which carry the binds along with the text, so a statement assembled from
    fragments always has exactly one bind value per placeholder.
    """

    sql: str
    binds: tuple[Any, ...] = ()

    @classmethod
    def bound(cls, sql: str, *binds: Any) -> Fragment:
        return cls(sql, tuple(binds))

    @classmethod
    def tuple_of(cls, values: Iterable[Any]) -> Fragment:
        """Parenthesized placeholder tuple, ``(?, ?)``, binding ``values``."""
        values = tuple(values)
        return cls(f"({placeholders(len(values))})", values)

    @classmethod
    def join(cls, fragments: Iterable[Fragment | None], separator: str = " ") -> Fragment:
        """Join fragments, skipping ``None``, keeping binds in text order."""
        parts = [f for f in fragments if f is not None]
        return cls(
            separator.join(f.sql for f in parts),
            tuple(value for f in parts for value in f.binds),
        )

    def prefix(self, text: str) -> Fragment:
        return Fragment(f"{text}{self.sql}", self.binds)

    def wrap(self, before: str, after: str = "") -> Fragment:
        return Fragment(f"{before}{self.sql}{after}", self.binds)
