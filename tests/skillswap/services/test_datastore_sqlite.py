from __future__ import annotations

import pytest

from skillswap.services.datastore import DataStoreService


def test_requires_a_collection(sqlite_store) -> None:
    with pytest.raises(ValueError):
        DataStoreService().find_one({})


def test_crud_roundtrip_is_scoped_by_collection(sqlite_store) -> None:
    store = DataStoreService(default_collection="things")
    other = DataStoreService(default_collection="others")

    first = store.insert_one({"name": "a", "rank": 2})
    store.insert_one({"name": "b", "rank": 1})
    other.insert_one({"name": "a"})

    assert store.find_one({"_id": first})["name"] == "a"
    assert [d["name"] for d in store.find_many(sort=[("rank", 1)])] == ["b", "a"]
    assert store.find_many(sort=[("rank", -1)], limit=1)[0]["name"] == "a"
    assert store.count() == 2
    assert other.count() == 1


def test_update_and_upsert(sqlite_store) -> None:
    store = DataStoreService(default_collection="things")
    _id = store.insert_one({"tags": []})

    res = store.update_one({"_id": _id}, {"$addToSet": {"tags": "x"}})
    assert res == {"matched_count": 1, "modified_count": 1, "upserted_id": None}
    assert store.find_one({"_id": _id})["tags"] == ["x"]

    missing = store.update_one({"_id": "nope"}, {"$set": {"a": 1}})
    assert missing["matched_count"] == 0

    upserted = store.update_one({"_id": "k"}, {"$set": {"_id": "k", "a": 1}}, upsert=True)
    assert upserted["upserted_id"] == "k"
    assert store.find_one({"_id": "k"})["a"] == 1


def test_update_many_and_delete_many(sqlite_store) -> None:
    store = DataStoreService(default_collection="things")
    for i in range(3):
        store.insert_one({"n": i, "flag": False})

    res = store.update_many({"n": {"$gte": 1}}, {"$set": {"flag": True}})
    assert res == {"matched_count": 2, "modified_count": 2}
    assert store.count({"flag": True}) == 2

    assert store.delete_many({"flag": True}) == 2
    assert store.delete_many({"flag": True}) == 0
    assert store.delete_one({"n": 0}) == 1
    assert store.count() == 0


def test_ping(sqlite_store) -> None:
    assert DataStoreService(default_collection="things").ping() is True


def test_array_updates_are_persisted(sqlite_store) -> None:
    store = DataStoreService(default_collection="things")
    _id = store.insert_one({"members": ["a"], "log": []})
    store.insert_one({"members": ["a"], "log": []})

    store.update_one({"_id": _id}, {"$addToSet": {"members": "b"}})
    store.update_one({"_id": _id}, {"$push": {"log": {"n": 1}}})
    store.update_one({"_id": _id}, {"$pull": {"members": "a"}})
    res = store.update_many({"members": "a"}, {"$push": {"log": {"n": 2}}})

    assert res["modified_count"] == 1
    assert store.find_one({"_id": _id}) == {"_id": _id, "members": ["b"], "log": [{"n": 1}]}
    other = store.find_one({"_id": {"$ne": _id}})
    assert other["log"] == [{"n": 2}]
