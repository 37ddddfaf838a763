"""Small-talk replies: answering the bot's name, pokes and the group air conditioner."""

from __future__ import annotations

import random
import time

DEFAULT_TEMPERATURE = 26


def name_reply(nickname: str, rng: random.Random | None = None) -> str:
    """Return one of the answers given when someone calls the bot by name."""
    rng = rng or random.Random()
    return rng.choice(
        (
            nickname + "在此，有何贵干~",
            "(っ●ω●)っ在~",
            "这里是" + nickname + "(っ●ω●)っ",
            nickname + "不在呢~",
        )
    )


class AirConditioner:
    """A pretend air conditioner kept per group: on/off switch and temperature."""

    def __init__(self) -> None:
        self._temperature: dict[int, int] = {}
        self._on: dict[int, bool] = {}

    def turn_on(self, gid: int) -> str:
        """Switch the conditioner of ``gid`` on and return the reply."""
        self._on[gid] = True
        return "❄️哔~"

    def turn_off(self, gid: int) -> str:
        """Switch the conditioner of ``gid`` off, forgetting its temperature."""
        self._on[gid] = False
        self._temperature.pop(gid, None)
        return "💤哔~"

    def _report(self, gid: int) -> str:
        head = "❄️风速中" if self._on.get(gid, False) else "💤"
        return f"{head}\n群温度 {self._temperature[gid]}℃"

    def set_temperature(self, gid: int, temp: int | str) -> str:
        """Set the temperature of ``gid`` if it is switched on; return the status."""
        self._temperature.setdefault(gid, DEFAULT_TEMPERATURE)
        if self._on.get(gid, False):
            self._temperature[gid] = int(temp)
        return self._report(gid)

    def status(self, gid: int) -> str:
        """Return the current status line of ``gid``."""
        self._temperature.setdefault(gid, DEFAULT_TEMPERATURE)
        return self._report(gid)


class PokeLimiter:
    """Token buckets per group deciding how the bot reacts to pokes.

    Each group holds ``capacity`` tokens that refill over ``period`` seconds.
    A poke first tries to spend three tokens, then one; with neither
    available the bot stays silent.
    """

    def __init__(self, period: float = 300.0, capacity: int = 8) -> None:
        self.period = period
        self.capacity = capacity
        self._buckets: dict[int, tuple[float, float]] = {}

    def _acquire(self, gid: int, n: int, now: float) -> bool:
        tokens, last = self._buckets.get(gid, (float(self.capacity), now))
        tokens = min(
            float(self.capacity),
            tokens + max(0.0, now - last) * self.capacity / self.period,
        )
        if tokens >= n:
            self._buckets[gid] = (tokens - n, now)
            return True
        self._buckets[gid] = (tokens, now)
        return False

    def poke(self, gid: int, nickname: str, now: float | None = None) -> str | None:
        """Return the reply to a poke in ``gid``, or None when poked too often."""
        if now is None:
            now = time.monotonic()
        if self._acquire(gid, 3, now):
            return f"请不要戳{nickname} >_<"
        if self._acquire(gid, 1, now):
            return f"喂(#`O′) 戳{nickname}干嘛！"
        return None