"""Drift bottles: messages thrown into named channels and fished out at random."""

from __future__ import annotations

import re
import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path

DEFAULT_CHANNEL = "global"

_ISO_POLY = 0xD800000000000000
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _make_table(poly: int) -> tuple[int, ...]:
    table = []
    for i in range(256):
        crc = i
        for _ in range(8):
            crc = (crc >> 1) ^ poly if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_ISO_TABLE = _make_table(_ISO_POLY)


def crc64_iso(data: bytes) -> int:
    """Return the CRC-64 (ISO polynomial) checksum of ``data`` as an unsigned int."""
    crc = _MASK64
    for byte in data:
        crc = _ISO_TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ _MASK64


def _signed64(value: int) -> int:
    return value - (1 << 64) if value >= 1 << 63 else value


def bottle_id(qq: int, grp: int, name: str, msg: str) -> int:
    """Return the signed 64-bit id of a bottle, the checksum of its fields."""
    return _signed64(crc64_iso(f"{qq}_{grp}_{name}_{msg}".encode("utf-8")))


@dataclass(frozen=True)
class Bottle:
    """A thrown message.

    ``grp`` limits where it can be fished out: 0 means anywhere, a positive
    number a group, a negative number a private chat.
    """

    id: int
    qq: int
    grp: int
    name: str
    msg: str

    @classmethod
    def new(cls, qq: int, grp: int, name: str, msg: str) -> Bottle:
        """Build a bottle whose id is derived from its fields."""
        return cls(bottle_id(qq, grp, name, msg), qq, grp, name, msg)


def _quote(channel: str) -> str:
    return '"' + channel.replace('"', '""') + '"'


class Sea:
    """Channels of bottles kept in an SQLite database, one table per channel."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self.create_channel(DEFAULT_CHANNEL)

    def __enter__(self) -> Sea:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _exists(self, channel: str) -> bool:
        row = self._conn.execute(
            "SELECT 1 FROM sqlite_master WHERE type='table' AND name=?", (channel,)
        ).fetchone()
        return row is not None

    def _require(self, channel: str) -> None:
        if not self._exists(channel):
            raise LookupError(f"no such channel: {channel}")

    def create_channel(self, channel: str) -> None:
        """Create ``channel`` unless it exists; raise ValueError for an empty name."""
        if not channel:
            raise ValueError("频道名为空!")
        with self._lock, self._conn:
            self._conn.execute(
                f"CREATE TABLE IF NOT EXISTS {_quote(channel)} ("
                "id INTEGER PRIMARY KEY, qq INTEGER, grp INTEGER, name TEXT, msg TEXT)"
            )

    def throw(self, channel: str, bottle: Bottle) -> None:
        """Put ``bottle`` into ``channel``, replacing an identical one."""
        with self._lock:
            self._require(channel)
            with self._conn:
                self._conn.execute(
                    f"INSERT OR REPLACE INTO {_quote(channel)} "
                    "(id, qq, grp, name, msg) VALUES (?, ?, ?, ?, ?)",
                    (bottle.id, bottle.qq, bottle.grp, bottle.name, bottle.msg),
                )

    def fetch(self, channel: str, grp: int) -> Bottle:
        """Return a random bottle of ``channel`` visible to ``grp``; raise LookupError if none."""
        with self._lock:
            self._require(channel)
            row = self._conn.execute(
                f"SELECT id, qq, grp, name, msg FROM {_quote(channel)} "
                "WHERE grp=0 OR grp=? ORDER BY RANDOM() LIMIT 1",
                (grp,),
            ).fetchone()
        if row is None:
            raise LookupError("no bottle in the sea")
        return Bottle(*row)

    def destroy(self, channel: str, bottle: Bottle) -> None:
        """Remove ``bottle`` from ``channel``."""
        with self._lock:
            self._require(channel)
            with self._conn:
                self._conn.execute(
                    f"DELETE FROM {_quote(channel)} WHERE id=?", (bottle.id,)
                )

    def count(self, channel: str) -> int:
        """Return how many bottles float in ``channel``."""
        with self._lock:
            self._require(channel)
            (n,) = self._conn.execute(
                f"SELECT COUNT(*) FROM {_quote(channel)}"
            ).fetchone()
        return n

    def close(self) -> None:
        """Close the database."""
        self._conn.close()


_THROW_RE = re.compile(r"^(在群\d+)?丢漂流瓶(到频道\w+)?\s+(.*)$", re.ASCII)
_FETCH_RE = re.compile(r"^(从频道\w+)?捡漂流瓶$", re.ASCII)


def parse_throw(text: str, group_id: int) -> tuple[int, str, str] | None:
    """Parse a throw command into (group, channel, message), or None if it is not one.

    Raises ValueError when the message is empty.
    """
    m = _THROW_RE.match(text)
    if m is None:
        return None
    grp = int(m.group(1)[len("在群"):]) if m.group(1) else group_id
    channel = m.group(2)[len("到频道"):] if m.group(2) else DEFAULT_CHANNEL
    msg = m.group(3)
    if not msg:
        raise ValueError("消息为空!")
    return grp, channel, msg


def parse_fetch(text: str) -> str | None:
    """Return the channel a fetch command names, or None if it is not one."""
    m = _FETCH_RE.match(text)
    if m is None:
        return None
    return m.group(1)[len("从频道"):] if m.group(1) else DEFAULT_CHANNEL