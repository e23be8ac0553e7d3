from __future__ import annotations
import threading
import uuid
from typing import Dict, Optional

import bcrypt

from .contracts import AuthErrorCodes, PasswordHasherPort, UserRecord, UserStorePort
from .errors import make_conflict_error

# bcrypt only looks at the first 72 bytes of a secret
BCRYPT_MAX_SECRET_BYTES = 72

class PasswordHasher(PasswordHasherPort):
    """
    bcrypt hasher. Every call to `hash` draws a fresh salt, so hashing the
    same secret twice gives two different strings that both verify.
    """
    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, plaintext: str, rounds: Optional[int] = None) -> str:
        salt = bcrypt.gensalt(rounds=rounds or self.rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False

class InMemoryUserStore(UserStorePort):
    """
    Process-local credential store. Keys by id, username and email.
    The uniqueness check and the write happen under one lock.
    """
    def __init__(self):
        self._lock = threading.RLock()
        self._by_id: Dict[str, UserRecord] = {}
        self._id_by_username: Dict[str, str] = {}
        self._id_by_email: Dict[str, str] = {}

    def find_by_username_or_email(self, username: str, email: str) -> Optional[UserRecord]:
        with self._lock:
            user_id = self._id_by_username.get(username) or self._id_by_email.get(email)
            return self._copy(user_id)

    def find_by_username(self, username: str) -> Optional[UserRecord]:
        with self._lock:
            return self._copy(self._id_by_username.get(username))

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        with self._lock:
            return self._copy(user_id)

    def insert(self, username: str, email: str, password_hash: str) -> UserRecord:
        with self._lock:
            if username in self._id_by_username or email in self._id_by_email:
                raise make_conflict_error(AuthErrorCodes.USER_EXISTS, "User already exists")
            record = UserRecord(
                id=uuid.uuid4().hex,
                username=username,
                email=email,
                password_hash=password_hash,
            )
            self._by_id[record.id] = record
            self._id_by_username[username] = record.id
            self._id_by_email[email] = record.id
            return record.model_copy()

    def increment_video_count(self, user_id: str) -> None:
        with self._lock:
            rec = self._by_id.get(user_id)
            if rec:
                rec.videos += 1

    def _copy(self, user_id: Optional[str]) -> Optional[UserRecord]:
        rec = self._by_id.get(user_id) if user_id else None
        return rec.model_copy() if rec else None
