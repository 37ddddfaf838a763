import json

from zbplugins.atri import Segment
from zbplugins.bilibili_push import (
    LIVE_URL,
    T_URL,
    TYPE_MSG,
    UID_ERRORS,
    DynamicTracker,
    LiveTracker,
    error_message,
    format_card,
    format_live,
    format_push_list,
)
from zbplugins.bilibili_store import Subscription


def _card(ctype, body, dynamic_id=42, timestamp=1000):
    return {
        "desc": {"type": ctype, "dynamic_id": dynamic_id, "timestamp": timestamp},
        "card": json.dumps(body, ensure_ascii=False),
    }


def test_error_message_known_status():
    assert error_message(-412, "bot") == UID_ERRORS[-412]


def test_error_message_unknown_status_names_bot():
    assert error_message(-1, "小白") == "未知错误，请私聊反馈给小白"


def test_format_card_text_dynamic():
    segs = format_card(_card(4, {"user": {"uname": "up"}, "item": {"timestamp": 1, "content": "hi"}}))
    assert segs[0].data.startswith("up在")
    assert segs[0].data.endswith(TYPE_MSG[4] + "\n")
    assert segs[1] == Segment("text", "hi\n")
    assert segs[-1] == Segment("text", "动态链接：" + T_URL + "42")


def test_format_card_pictures():
    body = {
        "user": {"name": "up"},
        "item": {"upload_time": 1, "description": "d",
                 "pictures": [{"img_src": "a.png"}, {"img_src": "b.png"}]},
    }
    segs = format_card(_card(2, body))
    images = [s.data for s in segs if s.kind == "image"]
    assert images == ["a.png", "b.png"]
    assert segs[1] == Segment("text", "d")


def test_format_card_short_video_keeps_raw_upload_time():
    body = {"user": {"name": "up"}, "item": {"upload_time": "2022-01-01",
            "description": "x", "cover": {"default": "c.jpg"}}}
    segs = format_card(_card(16, body))
    assert segs[0].data == "up在2022-01-01" + TYPE_MSG[16] + "\n"
    assert segs[2] == Segment("image", "c.jpg")


def test_format_card_unknown_type():
    segs = format_card(_card(7, {}))
    assert segs[0] == Segment("text", "未知动态类型7\n")


def test_format_card_forward_of_video():
    origin = {"owner": {"name": "orig"}, "pubdate": 1, "title": "T", "pic": "p.jpg",
              "desc": "D", "share_subtitle": "S", "short_link": "L"}
    body = {"user": {"uname": "fwd"}, "item": {"content": "look", "orig_type": 8},
            "origin": json.dumps(origin)}
    segs = format_card(_card(1, body))
    assert segs[0] == Segment("text", "fwd" + TYPE_MSG[1] + "\n")
    assert segs[2] == Segment("text", "转发的内容：\n")
    assert segs[3].data.startswith("orig在")
    assert Segment("image", "p.jpg") in segs
    assert Segment("text", "视频链接：L\n") in segs


def test_format_live_falls_back_to_room_id_and_keyframe():
    segs = format_live({"short_id": 0, "room_id": 99, "uname": "u", "title": "t",
                        "cover_from_user": "", "keyframe": "k.jpg"})
    assert segs[0] == Segment("text", "u 正在直播：\n")
    assert segs[2] == Segment("image", "k.jpg")
    assert segs[3] == Segment("text", "直播链接：" + LIVE_URL + "99")


def test_format_live_prefers_short_id():
    segs = format_live({"short_id": 5, "room_id": 99, "cover_from_user": "c"})
    assert segs[3].data.endswith("/5")
    assert segs[2].data == "c"


def test_format_push_list():
    pushes = [Subscription(1, 7, 10, live_disable=1, dynamic_disable=0)]
    text = format_push_list(pushes, {7: "name"})
    lines = text.split("\n")
    assert lines[0] == "--------推送列表--------"
    assert lines[1] == "uid:" + "7".ljust(12) + " 动态：● 直播：○ up主：name"


def test_dynamic_tracker_first_call_only_records():
    tracker = DynamicTracker()
    cards = [_card(4, {}, timestamp=100)]
    assert tracker.new_cards(1, cards, now=100) == []
    newer = [_card(4, {}, dynamic_id=2, timestamp=200), _card(4, {}, dynamic_id=1, timestamp=150)]
    fresh = tracker.new_cards(1, newer, now=200)
    assert [c["desc"]["dynamic_id"] for c in fresh] == [1, 2]
    assert tracker.new_cards(1, newer, now=200) == []


def test_dynamic_tracker_ignores_old_cards():
    tracker = DynamicTracker()
    tracker.new_cards(1, [_card(4, {}, timestamp=100)])
    assert tracker.new_cards(1, [_card(4, {}, timestamp=200)], now=10000) == []
    assert tracker.new_cards(1, [], now=0) == []


def test_live_tracker_transitions():
    tracker = LiveTracker()
    assert tracker.update(5, 1) is False
    assert tracker.update(5, 1) is False
    assert tracker.update(5, 2) is False
    assert tracker.update(5, 1) is True
    assert tracker.update(5, 0) is False
    assert tracker.update(5, 0) is False