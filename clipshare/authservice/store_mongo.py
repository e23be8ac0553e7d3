from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from .contracts import AuthErrorCodes, UserRecord, UserStorePort
from .errors import make_conflict_error

log = logging.getLogger("authservice")

class MongoUserStore(UserStorePort):
    """
    Credential store backed by a MongoDB collection.

    Uniqueness of `username` and `email` is enforced by unique indexes, so a
    duplicate insert that slipped past the service's pre-check still fails
    here with ConflictError.
    """
    def __init__(self, collection: Collection):
        self.collection = collection

    def ensure_indexes(self) -> None:
        self.collection.create_index([("username", ASCENDING)], unique=True, name="uniq_username")
        self.collection.create_index([("email", ASCENDING)], unique=True, name="uniq_email")

    def find_by_username_or_email(self, username: str, email: str) -> Optional[UserRecord]:
        doc = self.collection.find_one({"$or": [{"username": username}, {"email": email}]})
        return _to_record(doc)

    def find_by_username(self, username: str) -> Optional[UserRecord]:
        return _to_record(self.collection.find_one({"username": username}))

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        oid = _object_id(user_id)
        if oid is None:
            return None
        return _to_record(self.collection.find_one({"_id": oid}))

    def insert(self, username: str, email: str, password_hash: str) -> UserRecord:
        doc: Dict[str, Any] = {
            "username": username,
            "email": email,
            "password_hash": password_hash,
            "videos": 0,
            "followers": 0,
            "following": 0,
        }
        try:
            res = self.collection.insert_one(doc)
        except DuplicateKeyError as ex:
            log.info("users.insert duplicate key=%s", (ex.details or {}).get("keyValue"))
            raise make_conflict_error(AuthErrorCodes.USER_EXISTS, "User already exists")
        doc["_id"] = res.inserted_id
        return _to_record(doc)

    def increment_video_count(self, user_id: str) -> None:
        oid = _object_id(user_id)
        if oid is None:
            return
        self.collection.find_one_and_update(
            {"_id": oid}, {"$inc": {"videos": 1}}, return_document=ReturnDocument.AFTER
        )

def _object_id(user_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(user_id)
    except (InvalidId, TypeError):
        return None

def _to_record(doc: Optional[Dict[str, Any]]) -> Optional[UserRecord]:
    if not doc:
        return None
    return UserRecord(
        id=str(doc["_id"]),
        username=doc["username"],
        email=doc["email"],
        password_hash=doc["password_hash"],
        videos=doc.get("videos", 0),
        followers=doc.get("followers", 0),
        following=doc.get("following", 0),
    )
