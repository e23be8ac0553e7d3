from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from pymongo import DESCENDING

from clipshare.catalog import InMemoryVideoRepo, MongoVideoRepo, VideoCatalog, VideoRecord
from clipshare.errors import InternalError

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _video(vid, owner, minutes):
    return VideoRecord(
        id=vid, owner_id=owner, url=f"http://media.test/{vid}.mp4", public_id=f"videos/{vid}.mp4",
        caption=f"clip {vid}", uploaded_at=T0 + timedelta(minutes=minutes),
    )


def test_listing_is_newest_first():
    repo = InMemoryVideoRepo()
    repo.add(_video("v1", "u1", 0))
    repo.add(_video("v3", "u2", 20))
    repo.add(_video("v2", "u1", 10))

    catalog = VideoCatalog(repo)
    assert [v.id for v in catalog.list_all()] == ["v3", "v2", "v1"]
    assert [v.id for v in catalog.list_by_owner("u1")] == ["v2", "v1"]
    assert catalog.list_by_owner("nobody") == []


def test_repo_failure_becomes_internal_error():
    repo = MagicMock()
    repo.list_all.side_effect = RuntimeError("socket closed")
    repo.list_by_owner.side_effect = RuntimeError("socket closed")
    catalog = VideoCatalog(repo)
    with pytest.raises(InternalError) as ei:
        catalog.list_all()
    assert ei.value.message == "Failed to fetch videos"
    with pytest.raises(InternalError):
        catalog.list_by_owner("u1")


def test_mongo_repo_sorts_by_upload_time_descending():
    coll = MagicMock()
    coll.find.return_value.sort.return_value = [
        {"_id": "v2", "owner_id": "u1", "url": "http://m/v2", "public_id": "v2", "uploaded_at": T0, "caption": None},
    ]
    repo = MongoVideoRepo(coll)

    videos = repo.list_by_owner("u1")

    coll.find.assert_called_once_with({"owner_id": "u1"})
    coll.find.return_value.sort.assert_called_once_with("uploaded_at", DESCENDING)
    assert videos[0].id == "v2"
    assert videos[0].uploaded_at == T0


def test_mongo_repo_add_uses_record_id_as_key():
    coll = MagicMock()
    MongoVideoRepo(coll).add(_video("v1", "u1", 0))
    doc = coll.insert_one.call_args.args[0]
    assert doc["_id"] == "v1"
    assert "id" not in doc
    assert doc["owner_id"] == "u1"
