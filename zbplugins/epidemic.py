"""City epidemic statistics from the Tencent news feed."""

from __future__ import annotations

import json
import urllib.request
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

API_URL = "https://view.inews.qq.com/g2/getOnsInfo?name=disease_h5"


@dataclass
class Area:
    """Statistics of one region and its sub-regions."""

    name: str
    today_confirm: int = 0
    now_confirm: int = 0
    confirm: int = 0
    dead: int = 0
    heal: int = 0
    grade: str = ""
    children: list[Area] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Area:
        """Build an area tree from its JSON form."""
        today = data.get("today") or {}
        total = data.get("total") or {}
        return cls(
            name=data.get("name") or "",
            today_confirm=int(today.get("confirm") or 0),
            now_confirm=int(total.get("nowConfirm") or 0),
            confirm=int(total.get("confirm") or 0),
            dead=int(total.get("dead") or 0),
            heal=int(total.get("heal") or 0),
            grade=total.get("grade") or "",
            children=[cls.from_dict(c) for c in data.get("children") or []],
        )


def parse_epidemic(payload: bytes | str) -> tuple[str, list[Area]]:
    """Parse the feed: an object whose ``data`` field holds JSON text.

    Returns the last update time and the area tree roots.
    """
    outer = json.loads(payload)
    inner = json.loads(outer.get("data") or "{}")
    roots = [Area.from_dict(a) for a in inner.get("areaTree") or []]
    return inner.get("lastUpdateTime") or "", roots


def find_city(area: Area | None, name: str) -> Area | None:
    """Return the region called ``name`` under ``area``, searching depth first."""
    if area is None:
        return None
    if area.name == name:
        return area
    for child in area.children:
        if child.name == name:
            return child
        found = find_city(child, name)
        if found is not None:
            return found
    return None


def format_report(area: Area, update_time: str) -> str:
    """Return the message reporting the statistics of ``area``."""
    return (
        f"【{area.name}】疫情数据\n"
        f"新增：{area.today_confirm} ,"
        f"现有确诊：{area.now_confirm} ,"
        f"治愈：{area.heal} ,"
        f"死亡：{area.dead} {area.grade}\n"
        f"更新时间：{update_time}\n"
        "温馨提示：请大家做好防疫工作，出门带好口罩！"
    )


def _fetch(url: str) -> bytes:
    with urllib.request.urlopen(url, timeout=30) as response:
        return response.read()


def query_epidemic(
    city: str, fetch: Callable[[str], bytes] | None = None
) -> tuple[Area | None, str]:
    """Fetch the feed and return the area of ``city`` (or None) and the update time.

    Raises ValueError when the feed holds no area tree.
    """
    update_time, roots = parse_epidemic((fetch or _fetch)(API_URL))
    if not roots:
        raise ValueError("empty area tree")
    return find_city(roots[0], city), update_time