"""Picking one of several options separated by 还是."""

from __future__ import annotations

import random

SEPARATOR = "还是"


def choose(args: str, nickname: str, rng: random.Random | None = None) -> str:
    """Return the reply listing the options of ``args`` and the one picked."""
    rng = rng or random.Random()
    options = args.split(SEPARATOR)
    listing = "\n".join(f"{n}, {option}" for n, option in enumerate(options, 1))
    result = options[rng.randrange(len(options))]
    return f"> {nickname}\n你的选项有:\n{listing}\n你最终会选: {result}"