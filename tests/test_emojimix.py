import pytest

from zbplugins.emojimix import EMOJIS, QQFACE, face_to_emoji, match, mix, mix_urls


def test_mix_urls_pinned():
    u1, u2 = mix_urls(128516, 128512)
    assert u1 == (
        "https://www.gstatic.com/android/keyboard/emojikitchen/"
        "20201001/u1f604/u1f604_u1f600.png"
    )
    assert u2.endswith("/u1f600/u1f600_u1f604.png")


def test_mix_urls_use_each_date():
    u1, u2 = mix_urls(128558, 128516)
    assert f"/{EMOJIS[128558]}/" in u1
    assert f"/{EMOJIS[128516]}/" in u2


def test_face_to_emoji_text():
    assert face_to_emoji({"type": "text", "data": {"text": "😄"}}) == ord("😄")


def test_face_to_emoji_text_too_long():
    assert face_to_emoji({"type": "text", "data": {"text": "ab"}}) == 0


def test_face_to_emoji_face_known():
    assert face_to_emoji({"type": "face", "data": {"id": "0"}}) == QQFACE[0]


@pytest.mark.parametrize(
    "segment",
    [
        {"type": "face", "data": {"id": "3"}},
        {"type": "face", "data": {"id": "x"}},
        {"type": "image", "data": {"file": "a"}},
    ],
)
def test_face_to_emoji_invalid(segment):
    assert face_to_emoji(segment) == 0


def test_match_segments():
    segs = [
        {"type": "face", "data": {"id": "2"}},
        {"type": "text", "data": {"text": "😄"}},
    ]
    assert match(segs, "") == (QQFACE[2], ord("😄"))


def test_match_segments_unknown_rejected():
    segs = [
        {"type": "text", "data": {"text": "a"}},
        {"type": "text", "data": {"text": "😄"}},
    ]
    assert match(segs, "a😄") is None


def test_match_raw_message():
    assert match([{"type": "text", "data": {"text": "😄😀"}}], "😄😀") == (
        ord("😄"),
        ord("😀"),
    )


def test_match_raw_wrong_length():
    assert match([], "😄😀😄") is None
    assert match([], "😄a") is None


def test_mix_first_success():
    calls = []

    def head(url):
        calls.append(url)
        return 200

    u1, _ = mix_urls(128516, 128512)
    assert mix(128516, 128512, head) == u1
    assert calls == [u1]


def test_mix_falls_back_to_second():
    u1, u2 = mix_urls(128516, 128512)
    assert mix(128516, 128512, lambda u: 404 if u == u1 else 200) == u2


def test_mix_none_and_errors():
    def head(url):
        raise OSError("down")

    assert mix(128516, 128512, head) is None
    assert mix(128516, 128512, lambda u: 404) is None