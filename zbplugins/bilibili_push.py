"""Bilibili push messages: dynamic cards, live notices and subscription lists."""

from __future__ import annotations

import datetime
import json
import time
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from zbplugins.atri import Segment
from zbplugins.bilibili_store import Subscription

T_URL = "https://t.bilibili.com/"
LIVE_URL = "https://live.bilibili.com/"
RECENT_WINDOW = 600
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

TYPE_MSG: dict[int, str] = {
    1: "转发了一条动态",
    2: "有图营业",
    4: "无图营业",
    8: "发布了新投稿",
    16: "发布了短视频",
    64: "发布了新专栏",
    256: "发布了新音频",
}

UID_ERRORS: dict[int, str] = {
    0: "输入的uid有效",
    -400: "uid不存在，注意uid不是房间号",
    -402: "uid不存在，注意uid不是房间号",
    -412: "操作过于频繁IP暂时被风控，请半小时后再尝试",
}


def error_message(status: int, nickname: str) -> str:
    """Return the message explaining an account lookup status."""
    return UID_ERRORS.get(status, "未知错误，请私聊反馈给" + nickname)


def _get(obj: Any, path: str) -> Any:
    for key in path.split("."):
        if isinstance(obj, str):
            try:
                obj = json.loads(obj)
            except ValueError:
                return None
        if isinstance(obj, Mapping):
            obj = obj.get(key)
        elif isinstance(obj, list) and key.isdigit() and int(key) < len(obj):
            obj = obj[int(key)]
        else:
            return None
    return obj


def _str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        try:
            return int(float(value))
        except ValueError:
            return 0
    return 0


def _fmt_time(seconds: float) -> str:
    return datetime.datetime.fromtimestamp(seconds).strftime(_TIME_FORMAT)


def _text(data: str) -> Segment:
    return Segment("text", data)


def _image(url: str) -> Segment:
    return Segment("image", url)


def _body(ctype: int, data: Any, video_time_key: str) -> list[Segment]:
    """Format a card body of a non-forward type."""
    head = TYPE_MSG.get(ctype, "")
    if ctype == 2:
        out = [
            _text(_str(_get(data, "user.name")) + "在"
                  + _fmt_time(_int(_get(data, "item.upload_time"))) + head + "\n"),
            _text(_str(_get(data, "item.description"))),
        ]
        for pic in _get(data, "item.pictures") or []:
            out.append(_image(_str(_get(pic, "img_src"))))
        return out
    if ctype == 4:
        return [
            _text(_str(_get(data, "user.uname")) + "在"
                  + _fmt_time(_int(_get(data, "item.timestamp"))) + head + "\n"),
            _text(_str(_get(data, "item.content")) + "\n"),
        ]
    if ctype == 8:
        return [
            _text(_str(_get(data, "owner.name")) + "在"
                  + _fmt_time(_int(_get(data, video_time_key))) + head + "\n"),
            _text(_str(_get(data, "title"))),
            _image(_str(_get(data, "pic"))),
            _text(_str(_get(data, "desc")) + "\n"),
            _text(_str(_get(data, "share_subtitle")) + "\n"),
            _text("视频链接：" + _str(_get(data, "short_link")) + "\n"),
        ]
    if ctype == 16:
        return [
            _text(_str(_get(data, "user.name")) + "在"
                  + _str(_get(data, "item.upload_time")) + head + "\n"),
            _text(_str(_get(data, "item.description"))),
            _image(_str(_get(data, "item.cover.default"))),
        ]
    if ctype == 64:
        return [
            _text(_str(_get(data, "author.name")) + "在"
                  + _fmt_time(_int(_get(data, "publish_time"))) + head + "\n"),
            _text(_str(_get(data, "title")) + "\n"),
            _text(_str(_get(data, "summary"))),
            _image(_str(_get(data, "banner_url"))),
        ]
    if ctype == 256:
        return [
            _text(_str(_get(data, "upper")) + "在"
                  + _fmt_time(_int(_get(data, "ctime")) / 1000) + head + "\n"),
            _text(_str(_get(data, "title"))),
            _image(_str(_get(data, "cover"))),
        ]
    return [_text("未知动态类型" + str(ctype) + "\n")]


def format_card(card: Mapping[str, Any]) -> list[Segment]:
    """Return the push message for one dynamic card of the space history API."""
    ctype = _int(_get(card, "desc.type"))
    card_str = _str(card.get("card"))
    if ctype == 0:
        name = _str(_get(card, "desc.user_profile.info.uname"))
        stamp = _fmt_time(_int(_get(card, "desc.timestamp")))
        msg = [_text(name + "在" + stamp + TYPE_MSG.get(0, "") + "\n")]
    elif ctype == 1:
        msg = [
            _text(_str(_get(card_str, "user.uname")) + TYPE_MSG[1] + "\n"),
            _text(_str(_get(card_str, "item.content")) + "\n"),
            _text("转发的内容：\n"),
        ]
        orig_type = _int(_get(card_str, "item.orig_type"))
        origin = _str(_get(card_str, "origin"))
        if orig_type == 1:
            msg.append(_text(_str(_get(origin, "user.uname")) + TYPE_MSG[1] + "\n"))
        else:
            msg.extend(_body(orig_type, origin, "pubdate"))
    else:
        msg = _body(ctype, card_str, "ctime")
    msg.append(_text("动态链接：" + T_URL + _str(_get(card, "desc.dynamic_id"))))
    return msg


def format_live(value: Mapping[str, Any]) -> list[Segment]:
    """Return the notice that a streamer went live, from one room status entry."""
    room_id = _int(value.get("short_id")) or _int(value.get("room_id"))
    cover = _str(value.get("cover_from_user")) or _str(value.get("keyframe"))
    return [
        _text(_str(value.get("uname")) + " 正在直播：\n"),
        _text(_str(value.get("title"))),
        _image(cover),
        _text("直播链接：" + LIVE_URL + str(room_id)),
    ]


def format_push_list(
    pushes: Iterable[Subscription], names: Mapping[int, str]
) -> str:
    """Return the subscription list of a chat, marking which pushes are on."""
    lines = ["--------推送列表--------"]
    for sub in pushes:
        dynamic = "●" if sub.dynamic_disable == 0 else "○"
        live = "●" if sub.live_disable == 0 else "○"
        lines.append(
            f"uid:{sub.bilibili_uid:<12d} 动态：{dynamic} 直播：{live}"
            f" up主：{names.get(sub.bilibili_uid, '')}"
        )
    return "\n".join(lines)


class DynamicTracker:
    """Remembers the newest dynamic seen per uploader and yields the newer ones."""

    def __init__(self) -> None:
        self._last: dict[int, int] = {}

    def new_cards(
        self,
        buid: int,
        cards: Sequence[Mapping[str, Any]],
        now: float | None = None,
    ) -> list[Mapping[str, Any]]:
        """Return the cards to push, oldest first.

        ``cards`` come newest first. The first call for an uploader only
        records its newest timestamp. A card is new when it is later than the
        recorded one and at most ten minutes old.
        """
        if not cards:
            return []
        if buid not in self._last:
            self._last[buid] = _int(_get(cards[0], "desc.timestamp"))
            return []
        if now is None:
            now = time.time()
        last = self._last[buid]
        fresh = []
        for card in reversed(cards):
            stamp = _int(_get(card, "desc.timestamp"))
            if stamp > last and stamp > int(now) - RECENT_WINDOW:
                self._last[buid] = stamp
                fresh.append(card)
        return fresh


class LiveTracker:
    """Remembers each uploader's live status and reports when a stream starts."""

    def __init__(self) -> None:
        self._status: dict[int, int] = {}

    def update(self, buid: int, status: int) -> bool:
        """Record ``status`` and return True if ``buid`` has just gone live.

        Status 2 (rotating replays) counts as offline; the first status seen
        for an uploader is only recorded.
        """
        new = 0 if status == 2 else status
        if buid not in self._status:
            self._status[buid] = new
            return False
        old = self._status[buid]
        self._status[buid] = new
        return new != old and new == 1