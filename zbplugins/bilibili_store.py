"""Subscriptions of chats to bilibili uploaders, kept in SQLite."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path

_FLAGS = ("live_disable", "dynamic_disable")


@dataclass(frozen=True)
class Subscription:
    """One chat's subscription to one uploader; a flag of 1 turns that push off."""

    id: int
    bilibili_uid: int
    group_id: int
    live_disable: int = 0
    dynamic_disable: int = 0


class PushStore:
    """Subscriptions and known uploader names."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS bilibili_push ("
                "id INTEGER PRIMARY KEY AUTOINCREMENT, "
                "bilibili_uid INTEGER, group_id INTEGER, "
                "live_disable INTEGER DEFAULT 0, dynamic_disable INTEGER DEFAULT 0)"
            )
            self._conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_buid_gid "
                "ON bilibili_push (bilibili_uid, group_id)"
            )
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS bilibili_up ("
                "bilibili_uid INTEGER PRIMARY KEY, name TEXT)"
            )

    def __enter__(self) -> PushStore:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def upsert(self, buid: int, group_id: int, **kwargs: int) -> None:
        """Set the given flags of a subscription, creating it when missing.

        Accepted flags are ``live_disable`` and ``dynamic_disable``; flags not
        given keep their value, or default to 0 for a new subscription.
        """
        unknown = set(kwargs) - set(_FLAGS)
        if unknown:
            raise TypeError(f"unknown fields: {', '.join(sorted(unknown))}")
        with self._conn:
            row = self._conn.execute(
                "SELECT id FROM bilibili_push WHERE bilibili_uid = ? AND group_id = ? "
                "ORDER BY id LIMIT 1",
                (buid, group_id),
            ).fetchone()
            if row is None:
                self._conn.execute(
                    "INSERT INTO bilibili_push "
                    "(bilibili_uid, group_id, live_disable, dynamic_disable) "
                    "VALUES (?, ?, ?, ?)",
                    (
                        buid,
                        group_id,
                        int(kwargs.get("live_disable", 0)),
                        int(kwargs.get("dynamic_disable", 0)),
                    ),
                )
            elif kwargs:
                columns = ", ".join(f"{name} = ?" for name in kwargs)
                self._conn.execute(
                    f"UPDATE bilibili_push SET {columns} "
                    "WHERE bilibili_uid = ? AND group_id = ?",
                    (*(int(v) for v in kwargs.values()), buid, group_id),
                )

    def subscribe(self, buid: int, group_id: int) -> None:
        """Turn on both live and dynamic pushes."""
        self.upsert(buid, group_id, live_disable=0, dynamic_disable=0)

    def unsubscribe(self, buid: int, group_id: int) -> None:
        """Turn off both live and dynamic pushes."""
        self.upsert(buid, group_id, live_disable=1, dynamic_disable=1)

    def unsubscribe_dynamic(self, buid: int, group_id: int) -> None:
        """Turn off dynamic pushes only."""
        self.upsert(buid, group_id, dynamic_disable=1)

    def unsubscribe_live(self, buid: int, group_id: int) -> None:
        """Turn off live pushes only."""
        self.upsert(buid, group_id, live_disable=1)

    def _distinct_buids(self, column: str) -> list[int]:
        rows = self._conn.execute(
            f"SELECT bilibili_uid FROM bilibili_push WHERE {column} = 0 ORDER BY id"
        ).fetchall()
        return list(dict.fromkeys(r[0] for r in rows))

    def buids_with_live(self) -> list[int]:
        """Return the uploaders someone follows live, each once, in first-seen order."""
        return self._distinct_buids("live_disable")

    def buids_with_dynamic(self) -> list[int]:
        """Return the uploaders someone follows dynamics of, each once."""
        return self._distinct_buids("dynamic_disable")

    def _groups(self, buid: int, column: str) -> list[int]:
        rows = self._conn.execute(
            f"SELECT group_id FROM bilibili_push WHERE bilibili_uid = ? AND {column} = 0 "
            "ORDER BY id",
            (buid,),
        ).fetchall()
        return [r[0] for r in rows]

    def groups_for_live(self, buid: int) -> list[int]:
        """Return the chats to notify when ``buid`` goes live."""
        return self._groups(buid, "live_disable")

    def groups_for_dynamic(self, buid: int) -> list[int]:
        """Return the chats to notify of new dynamics of ``buid``."""
        return self._groups(buid, "dynamic_disable")

    def pushes_for_group(self, group_id: int) -> list[Subscription]:
        """Return the subscriptions of a chat that still push something."""
        rows = self._conn.execute(
            "SELECT id, bilibili_uid, group_id, live_disable, dynamic_disable "
            "FROM bilibili_push WHERE group_id = ? "
            "AND (live_disable = 0 OR dynamic_disable = 0) ORDER BY id",
            (group_id,),
        ).fetchall()
        return [Subscription(*row) for row in rows]

    def add_up(self, buid: int, name: str) -> None:
        """Remember the name of uploader ``buid``; a known uploader is left as it is."""
        with self._conn:
            self._conn.execute(
                "INSERT OR IGNORE INTO bilibili_up (bilibili_uid, name) VALUES (?, ?)",
                (buid, name),
            )

    def up_names(self) -> dict[int, str]:
        """Return all known uploader names by uid."""
        rows = self._conn.execute("SELECT bilibili_uid, name FROM bilibili_up").fetchall()
        return {uid: name or "" for uid, name in rows}

    def close(self) -> None:
        """Close the database."""
        self._conn.close()