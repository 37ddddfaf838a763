"""Diana essays: a store of 'little essays' and the duplicate check against asoulcnki."""

from __future__ import annotations

import datetime
import hashlib
import json
import math
import sqlite3
import urllib.request
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

HENTAI_ID = -3802576048116006195
CHECK_API = "https://asoulcnki.asia/v1/api/check"
NOT_FOUND = "枝网没搜到，查重率为0%，我的评价是：一眼真"
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def text_id(text: str) -> int:
    """Return the id of an essay: the first eight MD5 bytes read little-endian, signed."""
    digest = hashlib.md5(text.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "little", signed=True)


class TextStore:
    """Essays kept in an SQLite table."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS text (id INTEGER PRIMARY KEY, data TEXT)"
            )

    def __enter__(self) -> TextStore:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def add(self, text: str) -> int:
        """Store ``text`` and return its id."""
        tid = text_id(text)
        with self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO text (id, data) VALUES (?, ?)", (tid, text)
            )
        return tid

    def random(self) -> str:
        """Return a random essay; raise LookupError when there is none."""
        row = self._conn.execute(
            "SELECT data FROM text ORDER BY RANDOM() LIMIT 1"
        ).fetchone()
        if row is None:
            raise LookupError("no essay stored")
        return row[0]

    def hentai(self) -> str:
        """Return the special essay; raise LookupError when it is missing."""
        row = self._conn.execute(
            "SELECT data FROM text WHERE id = ?", (HENTAI_ID,)
        ).fetchone()
        if row is None:
            raise LookupError("essay not found")
        return row[0]

    def count(self) -> int:
        """Return the number of essays."""
        (n,) = self._conn.execute("SELECT COUNT(*) FROM text").fetchone()
        return n

    def close(self) -> None:
        """Close the database."""
        self._conn.close()


def full_match(segments: Sequence[Mapping[str, Any]], *args: str) -> bool:
    """Return True if a text segment, stripped of spaces and line breaks, equals one of ``args``."""
    for segment in segments:
        if segment.get("type") != "text":
            continue
        data = segment.get("data") or {}
        text = str(data.get("text", ""))
        for ch in (" ", "\r", "\n"):
            text = text.replace(ch, "")
        if text in args:
            return True
    return False


def _num(value: Any) -> str:
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def _cut_bytes(text: str, size: int) -> str:
    return text.encode("utf-8")[:size].decode("utf-8", errors="ignore")


def format_zhiwang(
    result: Mapping[str, Any] | None, now: datetime.datetime | None = None
) -> str:
    """Return the duplicate-check report for an API result.

    Raises ValueError when the result is missing or reports an error.
    """
    if not result or result.get("code") != 0:
        raise ValueError("api返回错误")
    data = result.get("data") or {}
    related = data.get("related") or []
    if not related:
        return NOT_FOUND
    first = related[0]
    info = first[1]
    now = now or datetime.datetime.now()
    rate = int(math.floor(float(data.get("rate") or 0) * 100))
    published = datetime.datetime.fromtimestamp(int(info.get("ctime") or 0))
    return (
        "枝网文本复制检测报告(简洁)\n"
        f"查重时间: {now.strftime(_TIME_FORMAT)}\n"
        f"总文字复制比: {rate}%\n"
        "相似小作文:\n"
        f"{_cut_bytes(str(info.get('content', '')), 102)}.....\n"
        f"获赞数{_num(info.get('like_num'))}\n"
        f"{first[2]}\n"
        f"作者: {info.get('m_name')}\n"
        f"发表时间: {published.strftime(_TIME_FORMAT)}\n"
        "查重结果仅作参考，请注意辨别是否为原创\n"
        "数据来源: https://asoulcnki.asia/"
    )


def check_duplicate(text: str) -> dict[str, Any] | None:
    """Ask the checking service about ``text``; return its answer, or None on failure."""
    body = json.dumps({"text": text}).encode("utf-8")
    request = urllib.request.Request(
        CHECK_API,
        data=body,
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    try:
        with urllib.request.urlopen(request, timeout=30) as response:
            return json.loads(response.read())
    except (OSError, ValueError):
        return None