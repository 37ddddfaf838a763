"""Turning Chinese text into 'abstract speech' emoji by pronunciation."""

from __future__ import annotations

import sqlite3
from pathlib import Path


class PinyinDB:
    """Lookup of character pronunciations and of emoji sounding alike."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS pinyin (word TEXT PRIMARY KEY, pronunciation TEXT)"
            )
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS emoji (pronunciation TEXT PRIMARY KEY, emoji TEXT)"
            )

    def __enter__(self) -> PinyinDB:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def pinyin(self, word: str) -> str:
        """Return the pronunciation of ``word``, or an empty string."""
        row = self._conn.execute(
            "SELECT pronunciation FROM pinyin WHERE word = ? LIMIT 1", (word,)
        ).fetchone()
        return row[0] or "" if row else ""

    def emoji(self, pronunciation: str) -> str:
        """Return the emoji pronounced ``pronunciation``, or an empty string."""
        row = self._conn.execute(
            "SELECT emoji FROM emoji WHERE pronunciation = ? LIMIT 1", (pronunciation,)
        ).fetchone()
        return row[0] or "" if row else ""

    def translate(self, text: str) -> str:
        """Replace character pairs, then single characters, by emoji that sound alike."""
        out = []
        i = 0
        while i < len(text):
            if i < len(text) - 1:
                e = self.emoji(self.pinyin(text[i]) + self.pinyin(text[i + 1]))
                if e:
                    out.append(e)
                    i += 2
                    continue
            e = self.emoji(self.pinyin(text[i]))
            out.append(e or text[i])
            i += 1
        return "".join(out)

    def close(self) -> None:
        """Close the database."""
        self._conn.close()