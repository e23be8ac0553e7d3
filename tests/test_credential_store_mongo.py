from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from clipshare.authservice import MongoUserStore
from clipshare.errors import ConflictError


def _doc(**overrides):
    doc = {
        "_id": ObjectId(),
        "username": "alice",
        "email": "a@x.com",
        "password_hash": "$2b$04$hash",
        "videos": 2,
        "followers": 0,
        "following": 1,
    }
    doc.update(overrides)
    return doc


def test_ensure_indexes_makes_username_and_email_unique():
    coll = MagicMock()
    MongoUserStore(coll).ensure_indexes()
    assert coll.create_index.call_count == 2
    keys = [c.args[0][0][0] for c in coll.create_index.call_args_list]
    assert sorted(keys) == ["email", "username"]
    assert all(c.kwargs["unique"] is True for c in coll.create_index.call_args_list)


def test_insert_returns_record_with_zeroed_counters():
    coll = MagicMock()
    oid = ObjectId()
    coll.insert_one.return_value = MagicMock(inserted_id=oid)

    rec = MongoUserStore(coll).insert("alice", "a@x.com", "$2b$04$hash")

    assert rec.id == str(oid)
    assert (rec.videos, rec.followers, rec.following) == (0, 0, 0)
    inserted = coll.insert_one.call_args.args[0]
    assert inserted["password_hash"] == "$2b$04$hash"


def test_duplicate_key_becomes_conflict():
    coll = MagicMock()
    coll.insert_one.side_effect = DuplicateKeyError(
        "E11000 duplicate key error", 11000, {"keyValue": {"username": "alice"}}
    )
    with pytest.raises(ConflictError) as ei:
        MongoUserStore(coll).insert("alice", "new@x.com", "$2b$04$hash")
    assert ei.value.code == "USER_EXISTS"


def test_lookup_by_username_or_email_uses_or_query():
    coll = MagicMock()
    doc = _doc()
    coll.find_one.return_value = doc

    rec = MongoUserStore(coll).find_by_username_or_email("alice", "a@x.com")

    assert rec.id == str(doc["_id"])
    assert rec.videos == 2
    coll.find_one.assert_called_once_with({"$or": [{"username": "alice"}, {"email": "a@x.com"}]})


def test_lookup_miss_returns_none():
    coll = MagicMock()
    coll.find_one.return_value = None
    assert MongoUserStore(coll).find_by_username("ghost") is None


def test_get_by_id_ignores_malformed_ids():
    coll = MagicMock()
    store = MongoUserStore(coll)
    assert store.get_by_id("not-an-object-id") is None
    coll.find_one.assert_not_called()

    doc = _doc()
    coll.find_one.return_value = doc
    assert store.get_by_id(str(doc["_id"])).username == "alice"


def test_increment_video_count():
    coll = MagicMock()
    oid = ObjectId()
    MongoUserStore(coll).increment_video_count(str(oid))
    query, update = coll.find_one_and_update.call_args.args
    assert query == {"_id": oid}
    assert update == {"$inc": {"videos": 1}}
