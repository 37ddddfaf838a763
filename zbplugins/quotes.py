"""Canned texts kept in SQLite: curses, CP stories, jokes, book reviews and pictures."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any

MIN_LEVEL = "min"
MAX_LEVEL = "max"

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS curse (id INTEGER PRIMARY KEY, text TEXT, level TEXT)",
    "CREATE TABLE IF NOT EXISTS cp_story "
    "(id INTEGER PRIMARY KEY, gong TEXT, shou TEXT, story TEXT)",
    "CREATE TABLE IF NOT EXISTS jokes (id INTEGER PRIMARY KEY, text TEXT)",
    "CREATE TABLE IF NOT EXISTS bookreview (id INTEGER PRIMARY KEY, bookreview TEXT)",
    "CREATE TABLE IF NOT EXISTS picture (id INTEGER PRIMARY KEY, url TEXT)",
)


class QuoteDB:
    """Read access to the quote tables of one SQLite database."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        with self._conn:
            for statement in _SCHEMA:
                self._conn.execute(statement)

    def __enter__(self) -> QuoteDB:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _one(self, sql: str, params: tuple[Any, ...] = ()) -> tuple[Any, ...] | None:
        return self._conn.execute(sql, params).fetchone()

    def random_curse(self, level: str) -> str:
        """Return a random curse of ``level``, or an empty string when there is none."""
        row = self._one(
            "SELECT text FROM curse WHERE level = ? ORDER BY RANDOM() LIMIT 1", (level,)
        )
        return (row[0] or "") if row else ""

    def random_cp_story(self) -> dict[str, Any]:
        """Return a random story as a dict with ``id``, ``gong``, ``shou`` and ``story``.

        Missing stories give empty fields.
        """
        row = self._one(
            "SELECT id, gong, shou, story FROM cp_story ORDER BY RANDOM() LIMIT 1"
        )
        if row is None:
            return {"id": 0, "gong": "", "shou": "", "story": ""}
        return {
            "id": row[0],
            "gong": row[1] or "",
            "shou": row[2] or "",
            "story": row[3] or "",
        }

    def random_joke(self, name: str) -> str:
        """Return a random joke with ``%name`` replaced; raise LookupError when there is none."""
        row = self._one("SELECT text FROM jokes ORDER BY RANDOM() LIMIT 1")
        if row is None:
            raise LookupError("no joke stored")
        return (row[0] or "").replace("%name", name)

    def book_review_by_keyword(self, keyword: str) -> str:
        """Return the first review containing ``keyword``, or an empty string."""
        row = self._one(
            "SELECT bookreview FROM bookreview WHERE bookreview LIKE ? LIMIT 1",
            (f"%{keyword}%",),
        )
        return (row[0] or "") if row else ""

    def random_book_review(self) -> str:
        """Return a random review, or an empty string when there is none."""
        row = self._one("SELECT bookreview FROM bookreview ORDER BY RANDOM() LIMIT 1")
        return (row[0] or "") if row else ""

    def random_picture(self) -> str:
        """Return the URL of a random picture; raise LookupError when there is none."""
        row = self._one("SELECT url FROM picture ORDER BY RANDOM() LIMIT 1")
        if row is None:
            raise LookupError("no picture stored")
        return row[0] or ""

    def close(self) -> None:
        """Close the database."""
        self._conn.close()


def fill_cp_story(story: dict[str, Any], gong: str, shou: str) -> str:
    """Put the names ``gong`` and ``shou`` into a story returned by random_cp_story.

    The placeholders and the story's own names are replaced; the story's
    second name is replaced by ``gong`` as well.
    """
    text = story["story"].replace("<攻>", gong)
    text = text.replace("<受>", shou)
    text = text.replace(story["gong"], gong)
    text = text.replace(story["shou"], gong)
    return text


def split_cp_names(args: str) -> tuple[str, str]:
    """Return the two names in ``args`` split by spaces; raise ValueError if fewer."""
    params = args.split(" ")
    if len(params) < 2:
        raise ValueError("请用空格分开两个人名")
    return params[0], params[1]