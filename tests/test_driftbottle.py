import pytest

from zbplugins.driftbottle import (
    Bottle,
    Sea,
    bottle_id,
    crc64_iso,
    parse_fetch,
    parse_throw,
)


def test_crc64_check_value():
    assert crc64_iso(b"123456789") == 0xB90956C775A41001


def test_crc64_empty_is_zero():
    assert crc64_iso(b"") == 0


def test_bottle_id_deterministic_and_signed():
    a = bottle_id(1, 2, "n", "m")
    assert a == bottle_id(1, 2, "n", "m")
    assert -(1 << 63) <= a < (1 << 63)
    assert a != bottle_id(1, 2, "n", "other")


def test_bottle_new_uses_id():
    b = Bottle.new(10, 0, "alice", "hello")
    assert b.id == bottle_id(10, 0, "alice", "hello")
    assert b.msg == "hello"


def test_throw_and_fetch_round_trip(tmp_path):
    with Sea(tmp_path / "sea.db") as sea:
        b = Bottle.new(10, 0, "alice", "hello")
        sea.throw("global", b)
        assert sea.fetch("global", 123) == b
        assert sea.count("global") == 1


def test_throw_twice_replaces():
    with Sea() as sea:
        b = Bottle.new(10, 0, "alice", "hello")
        sea.throw("global", b)
        sea.throw("global", b)
        assert sea.count("global") == 1


def test_group_restriction():
    with Sea() as sea:
        sea.throw("global", Bottle.new(10, 5, "alice", "hi"))
        with pytest.raises(LookupError):
            sea.fetch("global", 6)
        assert sea.fetch("global", 5).grp == 5


def test_destroy_empties_channel():
    with Sea() as sea:
        sea.create_channel("abc")
        b = Bottle.new(1, 0, "x", "y")
        sea.throw("abc", b)
        sea.destroy("abc", b)
        assert sea.count("abc") == 0
        with pytest.raises(LookupError):
            sea.fetch("abc", 1)


def test_missing_channel_raises():
    with Sea() as sea:
        with pytest.raises(LookupError):
            sea.count("nothere")
        with pytest.raises(LookupError):
            sea.throw("nothere", Bottle.new(1, 0, "x", "y"))


def test_empty_channel_name_rejected():
    with Sea() as sea:
        with pytest.raises(ValueError):
            sea.create_channel("")


def test_parse_throw_full():
    assert parse_throw("在群123丢漂流瓶到频道abc  hello", 9) == (123, "abc", "hello")


def test_parse_throw_defaults():
    assert parse_throw("丢漂流瓶 hi", 42) == (42, "global", "hi")


def test_parse_throw_empty_message():
    with pytest.raises(ValueError):
        parse_throw("丢漂流瓶 ", 1)


def test_parse_throw_non_ascii_channel_not_matched():
    assert parse_throw("丢漂流瓶到频道中文 x", 1) is None


def test_parse_fetch():
    assert parse_fetch("从频道abc捡漂流瓶") == "abc"
    assert parse_fetch("捡漂流瓶") == "global"
    assert parse_fetch("捡漂流瓶吧") is None