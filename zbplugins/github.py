"""GitHub repository search."""

from __future__ import annotations

import json
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Callable, Mapping
from typing import Any

from zbplugins.atri import Segment

SEARCH_API = "https://api.github.com/search/repositories"
OPENGRAPH = "https://opengraph.githubassets.com/0/"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/88.0.4324.182 Safari/537.36"
)


class HTTPStatusError(Exception):
    """The server answered with a status other than 200."""

    def __init__(self, code: int) -> None:
        super().__init__(f"code {code}")
        self.code = code


def not_null(text: str, default: str) -> str:
    """Return ``text``, or ``default`` when it is empty."""
    return text or default


def net_get(url: str, headers: Mapping[str, str] | None = None) -> bytes:
    """GET ``url`` and return the body; raise HTTPStatusError unless the status is 200."""
    request = urllib.request.Request(url, headers=dict(headers or {}))
    try:
        with urllib.request.urlopen(request, timeout=30) as response:
            body = response.read()
            status = response.status
    except urllib.error.HTTPError as exc:
        raise HTTPStatusError(exc.code) from None
    if status != 200:
        raise HTTPStatusError(status)
    return body


def search_repo(
    query: str,
    fetch: Callable[[str, Mapping[str, str]], bytes] | None = None,
) -> dict[str, Any]:
    """Return the best repository matching ``query``; raise LookupError if none."""
    url = SEARCH_API + "?" + urllib.parse.urlencode({"q": query})
    body = (fetch or net_get)(url, {"User-Agent": USER_AGENT})
    info = json.loads(body)
    items = info.get("items") or []
    if not info.get("total_count") or not items:
        raise LookupError("没有找到这样的仓库")
    return items[0]


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _int(value: Any) -> int:
    return int(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else 0


def format_repo(repo: Mapping[str, Any], mode: str = "") -> list[Segment]:
    """Return the message for ``repo``.

    ``mode`` ``"-p "`` gives only the preview image, ``"-t "`` only the text,
    anything else both.
    """
    full_name = _str(repo.get("full_name"))
    image = Segment("image", OPENGRAPH + full_name)
    if mode == "-p ":
        return [image]
    license_info = repo.get("license") or {}
    text = Segment(
        "text",
        f"{full_name}\n"
        f"Description: {_str(repo.get('description'))}\n"
        f"Star/Fork/Issue: {_int(repo.get('watchers'))}/{_int(repo.get('forks'))}"
        f"/{_int(repo.get('open_issues'))}\n"
        f"Language: {not_null(_str(repo.get('language')), 'None')}\n"
        f"License: {not_null(_str(license_info.get('key')).upper(), 'None')}\n"
        f"Last pushed: {_str(repo.get('pushed_at'))}\n"
        f"Jump: {_str(repo.get('html_url'))}\n",
    )
    if mode == "-t ":
        return [text]
    return [text, image]