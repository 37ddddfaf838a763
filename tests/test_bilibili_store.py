import pytest

from zbplugins.bilibili_store import PushStore, Subscription


@pytest.fixture
def store():
    with PushStore() as s:
        yield s


def test_subscribe_creates_row(store):
    store.subscribe(100, 5)
    subs = store.pushes_for_group(5)
    assert len(subs) == 1
    assert (subs[0].bilibili_uid, subs[0].live_disable, subs[0].dynamic_disable) == (100, 0, 0)


def test_subscribe_twice_keeps_one_row(store):
    store.subscribe(100, 5)
    store.subscribe(100, 5)
    assert len(store.pushes_for_group(5)) == 1


def test_unsubscribe_hides_from_group(store):
    store.subscribe(100, 5)
    store.unsubscribe(100, 5)
    assert store.pushes_for_group(5) == []
    assert store.buids_with_live() == []
    assert store.buids_with_dynamic() == []


def test_unsubscribe_live_only(store):
    store.subscribe(100, 5)
    store.unsubscribe_live(100, 5)
    assert store.groups_for_live(100) == []
    assert store.groups_for_dynamic(100) == [5]
    assert store.pushes_for_group(5)[0].live_disable == 1


def test_unsubscribe_dynamic_only(store):
    store.subscribe(100, 5)
    store.unsubscribe_dynamic(100, 5)
    assert store.groups_for_dynamic(100) == []
    assert store.groups_for_live(100) == [5]


def test_unsubscribe_dynamic_on_new_row(store):
    store.unsubscribe_dynamic(200, -7)
    subs = store.pushes_for_group(-7)
    assert subs == [Subscription(subs[0].id, 200, -7, 0, 1)]


def test_distinct_buids_in_order(store):
    store.subscribe(300, 1)
    store.subscribe(100, 2)
    store.subscribe(300, 3)
    assert store.buids_with_live() == [300, 100]
    assert store.groups_for_live(300) == [1, 3]


def test_upsert_rejects_unknown_field(store):
    with pytest.raises(TypeError):
        store.upsert(1, 1, bogus=1)


def test_add_up_keeps_first_name(store):
    store.add_up(100, "first")
    store.add_up(100, "second")
    assert store.up_names() == {100: "first"}


def test_persists_to_file(tmp_path):
    path = tmp_path / "push.db"
    with PushStore(path) as s:
        s.subscribe(42, 9)
    with PushStore(path) as s:
        assert s.groups_for_dynamic(42) == [9]