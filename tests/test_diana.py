import datetime
import io
import json
import sqlite3
import urllib.error
from unittest import mock

import pytest

from zbplugins.diana import (
    HENTAI_ID,
    NOT_FOUND,
    TextStore,
    check_duplicate,
    format_zhiwang,
    full_match,
    text_id,
)


def test_text_id_invariants():
    a = text_id("hello")
    assert a == text_id("hello")
    assert -(1 << 63) <= a < (1 << 63)
    assert a != text_id("world")


def test_store_round_trip(tmp_path):
    with TextStore(tmp_path / "text.db") as store:
        tid = store.add("essay")
        assert tid == text_id("essay")
        assert store.random() == "essay"
        assert store.count() == 1
        store.add("essay")
        assert store.count() == 1


def test_random_empty_raises():
    with TextStore() as store:
        with pytest.raises(LookupError):
            store.random()


def test_hentai(tmp_path):
    path = tmp_path / "text.db"
    with TextStore(path) as store:
        with pytest.raises(LookupError):
            store.hentai()
        conn = sqlite3.connect(path)
        conn.execute("INSERT INTO text VALUES (?, ?)", (HENTAI_ID, "sick"))
        conn.commit()
        conn.close()
        assert store.hentai() == "sick"


def test_full_match():
    segs = [
        {"type": "reply", "data": {"id": "1"}},
        {"type": "text", "data": {"text": " 查 重\r\n"}},
    ]
    assert full_match(segs, "查重") is True
    assert full_match(segs, "别的") is False
    assert full_match([{"type": "reply", "data": {}}], "查重") is False


def _result(content):
    return {
        "code": 0,
        "data": {
            "rate": 0.856,
            "related": [
                [0, {"content": content, "like_num": 12.0, "m_name": "someone", "ctime": 0.0},
                 "https://example.com/x"]
            ],
        },
    }


def test_format_zhiwang_report():
    now = datetime.datetime(2022, 3, 1, 12, 0, 0)
    text = format_zhiwang(_result("a" * 200), now)
    assert "查重时间: 2022-03-01 12:00:00\n" in text
    assert "总文字复制比: 85%\n" in text
    assert "a" * 102 + ".....\n" in text
    assert "a" * 103 not in text
    assert "获赞数12\n" in text
    assert "作者: someone\n" in text
    assert "https://example.com/x\n" in text


def test_format_zhiwang_no_related():
    assert format_zhiwang({"code": 0, "data": {"rate": 0, "related": []}}) == NOT_FOUND


def test_format_zhiwang_errors():
    with pytest.raises(ValueError):
        format_zhiwang(None)
    with pytest.raises(ValueError):
        format_zhiwang({"code": 1})


def test_check_duplicate_parses_response():
    payload = {"code": 0, "data": {"related": []}}

    class _Resp(io.BytesIO):
        pass

    with mock.patch(
        "urllib.request.urlopen", return_value=_Resp(json.dumps(payload).encode())
    ) as opened:
        assert check_duplicate("essay") == payload
    sent = opened.call_args[0][0]
    assert json.loads(sent.data) == {"text": "essay"}
    assert sent.get_method() == "POST"


def test_check_duplicate_failure_returns_none():
    with mock.patch(
        "urllib.request.urlopen", side_effect=urllib.error.URLError("down")
    ):
        assert check_duplicate("essay") is None