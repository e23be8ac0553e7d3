from __future__ import annotations
from typing import Any, Dict, List

from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection

from .contracts import VideoRecord, VideoRepoPort

class MongoVideoRepo(VideoRepoPort):
    """Video metadata in a MongoDB collection, keyed by the record id."""
    def __init__(self, collection: Collection):
        self.collection = collection

    def ensure_indexes(self) -> None:
        self.collection.create_index([("uploaded_at", DESCENDING)], name="uploaded_at_desc")
        self.collection.create_index([("owner_id", ASCENDING), ("uploaded_at", DESCENDING)], name="owner_uploaded_at")

    def add(self, record: VideoRecord) -> VideoRecord:
        doc = record.model_dump(exclude={"id"})
        doc["_id"] = record.id
        self.collection.insert_one(doc)
        return record

    def list_all(self) -> List[VideoRecord]:
        return [_to_record(d) for d in self.collection.find().sort("uploaded_at", DESCENDING)]

    def list_by_owner(self, owner_id: str) -> List[VideoRecord]:
        cursor = self.collection.find({"owner_id": owner_id}).sort("uploaded_at", DESCENDING)
        return [_to_record(d) for d in cursor]

def _to_record(doc: Dict[str, Any]) -> VideoRecord:
    data = dict(doc)
    data["id"] = str(data.pop("_id"))
    return VideoRecord(**data)
