import sqlite3

import pytest

from cetatenie.database import SubscriptionExistsError, SubscriptionStore, init_db


@pytest.fixture
def store():
    s = SubscriptionStore(init_db(":memory:"))
    yield s
    s.close()


def test_create_and_list(store):
    store.create_subscription(1, "123/RD/2023")
    store.create_subscription(1, "124/RD/2023")
    assert store.get_subscriptions(1) == ["123/RD/2023", "124/RD/2023"]


def test_duplicate_raises(store):
    store.create_subscription(1, "123/RD/2023")
    with pytest.raises(SubscriptionExistsError, match="subscription already exists"):
        store.create_subscription(1, "123/RD/2023")


def test_same_decree_other_chat_violates_unique(store):
    store.create_subscription(1, "123/RD/2023")
    with pytest.raises(sqlite3.IntegrityError):
        store.create_subscription(2, "123/RD/2023")


def test_delete_one(store):
    store.create_subscription(1, "1/RD/2022")
    store.create_subscription(1, "2/RD/2022")
    store.delete_subscription(1, "1/RD/2022")
    assert store.get_subscriptions(1) == ["2/RD/2022"]


def test_delete_all_only_for_chat(store):
    store.create_subscription(1, "1/RD/2022")
    store.create_subscription(2, "2/RD/2022")
    store.delete_all_subscriptions(1)
    assert store.get_subscriptions(1) == []
    assert [s.decree_number for s in store.get_all_subscriptions()] == ["2/RD/2022"]


def test_get_all_returns_records(store):
    store.create_subscription(7, "5/RD/2021")
    (sub,) = store.get_all_subscriptions()
    assert (sub.chat_id, sub.decree_number) == (7, "5/RD/2021")


def test_persists_to_file(tmp_path):
    path = str(tmp_path / "subs.db")
    first = SubscriptionStore(init_db(path))
    first.create_subscription(3, "9/RD/2024")
    first.close()
    second = SubscriptionStore(init_db(path))
    assert second.get_subscriptions(3) == ["9/RD/2024"]
    second.close()