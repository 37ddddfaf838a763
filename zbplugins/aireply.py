"""Per-chat choice of the AI reply service and of the text-to-speech voice."""

from __future__ import annotations

import threading

REPLY_MODES: tuple[str, ...] = ("青云客", "小爱")
DEFAULT_REPLY_MODE = "青云客"

TTS_VOICES: tuple[str, ...] = (
    "拟声鸟阿梓", "拟声鸟药水哥", "百度女声", "百度男声", "百度度逍遥", "百度度丫丫",
)
DEFAULT_TTS_VOICE = "拟声鸟阿梓"


def session_id(group_id: int, user_id: int) -> int:
    """Return the id settings are kept under: the group, or the negated user in private chat."""
    return group_id if group_id != 0 else -user_id


class ReplyModes:
    """Which reply service each chat uses, stored as an index into REPLY_MODES."""

    def __init__(self) -> None:
        self._data: dict[int, int] = {}

    def set_mode(self, gid: int, name: str) -> None:
        """Choose reply service ``name`` for ``gid``; raise ValueError if unknown."""
        try:
            index = REPLY_MODES.index(name)
        except ValueError:
            raise ValueError("no such mode") from None
        self._data[gid] = index

    def get_mode(self, gid: int) -> str:
        """Return the reply service of ``gid``."""
        index = self._data.get(gid, 0)
        return REPLY_MODES[index] if 0 <= index < len(REPLY_MODES) else DEFAULT_REPLY_MODE


class TTSModes:
    """Which voice each chat uses.

    Chats store a position in the voice list; promoting a voice to default
    swaps it with the first entry, so chats on position 0 follow the default.
    """

    def __init__(self, voices: tuple[str, ...] = TTS_VOICES) -> None:
        self._lock = threading.Lock()
        self._voices = list(voices)
        self._data: dict[int, int] = {}

    def list(self) -> list[str]:
        """Return a copy of the voice list in its current order."""
        with self._lock:
            return list(self._voices)

    def _index(self, name: str) -> int:
        try:
            return self._voices.index(name)
        except ValueError:
            raise ValueError(f"no such voice: {name}") from None

    def set_mode(self, gid: int, name: str) -> None:
        """Choose voice ``name`` for ``gid``; raise ValueError if unknown."""
        with self._lock:
            self._data[gid] = self._index(name)

    def get_mode(self, gid: int) -> str:
        """Return the voice of ``gid``."""
        with self._lock:
            index = self._data.get(gid, 0)
            if 0 <= index < len(self._voices):
                return self._voices[index]
        return DEFAULT_TTS_VOICE

    def set_default(self, name: str) -> None:
        """Move voice ``name`` to the front of the list; raise ValueError if unknown."""
        with self._lock:
            index = self._index(name)
            self._voices[0], self._voices[index] = self._voices[index], self._voices[0]