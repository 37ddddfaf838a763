"""Daily fortune slips: theme selection, seeding and text layout."""

from __future__ import annotations

import datetime
import random
from collections.abc import Mapping, Sequence

THEMES: tuple[str, ...] = (
    "车万", "DC4", "爱因斯坦", "星空列车", "樱云之恋", "富婆妹", "李清歌", "公主连结",
    "原神", "明日方舟", "碧蓝航线", "碧蓝幻想", "战双", "阴阳师", "赛马娘", "东方归言录",
)
DEFAULT_THEME = THEMES[0]

COLUMN_HEIGHT = 9
GLYPH_PADDING = 10
ORIGIN_X = 115
ORIGIN_Y = 320.0


class FortuneThemes:
    """Background theme chosen per group (or per user, as a negative id)."""

    def __init__(self) -> None:
        self._index = {name: i for i, name in enumerate(THEMES)}
        self._chosen: dict[int, int] = {}

    def set(self, gid: int, name: str) -> None:
        """Choose theme ``name`` for ``gid``; raise ValueError for an unknown theme."""
        try:
            self._chosen[gid] = self._index[name] & 0xFF
        except KeyError:
            raise ValueError("没有这个底图哦～") from None

    def get(self, gid: int) -> str:
        """Return the theme chosen for ``gid``, or the default."""
        value = self._chosen.get(gid, 0) & 0xFF
        return THEMES[value] if value < len(THEMES) else DEFAULT_THEME


def offset(total: int, now: int, distance: float) -> float:
    """Return the shift of item ``now`` (1-based) within ``total`` items spaced ``distance``."""
    if total % 2 == 0:
        return (float(now - total // 2) - 1) * distance
    return (float(now - total // 2) - 1.5) * distance


def rows_num(total: int, div: int) -> int:
    """Return how many groups of ``div`` are needed to hold ``total`` items."""
    return -(-total // div)


def glyph_positions(
    text: str, char_width: float, char_height: float
) -> list[tuple[str, float, float]]:
    """Lay out ``text`` in vertical columns read right to left.

    ``char_width`` and ``char_height`` are the measured size of one glyph;
    each character comes back with the point it is drawn at.
    """
    step_x = char_width + GLYPH_PADDING
    step_y = char_height + GLYPH_PADDING
    length = len(text)
    columns = rows_num(length, COLUMN_HEIGHT)
    positions = []
    if columns == 2:
        div = rows_num(length, 2)
        for i, char in enumerate(text):
            col = rows_num(i + 1, div)
            col_len = min(length - (col - 1) * div, div)
            row = i % div + 1
            if col == 2:
                row += COLUMN_HEIGHT - col_len
            x = -offset(columns, col, step_x) + ORIGIN_X
            y = offset(COLUMN_HEIGHT, row, step_y) + ORIGIN_Y
            positions.append((char, x, y))
        return positions
    for i, char in enumerate(text):
        col = rows_num(i + 1, COLUMN_HEIGHT)
        col_len = min(length - (col - 1) * COLUMN_HEIGHT, COLUMN_HEIGHT)
        row = i % COLUMN_HEIGHT + 1
        x = -offset(columns, col, step_x) + ORIGIN_X
        y = offset(col_len, row, step_y) + ORIGIN_Y
        positions.append((char, x, y))
    return positions


def seed_for(user_id: int, day: datetime.date | None = None) -> int:
    """Return the seed for a user's fortune on ``day``: user id plus YYYYMMDD."""
    day = day or datetime.date.today()
    return user_id + int(day.strftime("%Y%m%d"))


def pick_omikuji(
    omikujis: Sequence[Mapping[str, str]], seed: int
) -> tuple[str, str]:
    """Return the (title, content) of the slip chosen by ``seed``.

    Raises ValueError when there are no slips.
    """
    if not omikujis:
        raise ValueError("no omikuji loaded")
    slip = omikujis[random.Random(seed).randrange(len(omikujis))]
    return slip.get("title", ""), slip.get("content", "")