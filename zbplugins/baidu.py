"""Building 'let me search that for you' links."""

from __future__ import annotations

from urllib.parse import quote_plus

BASE = "https://buhuibaidu.me/?s="


def search_url(text: str) -> str | None:
    """Return the search link for ``text``, or None when it is empty."""
    if not text:
        return None
    return BASE + quote_plus(text)