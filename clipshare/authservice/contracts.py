from __future__ import annotations
from typing import List, Literal, Optional, Protocol
from pydantic import BaseModel, Field

# ---------- Domain Models ----------
class User(BaseModel):
    """Client-facing user. Never carries the password hash."""
    id: str
    username: str
    email: str
    videos: int = Field(default=0, ge=0)
    followers: int = Field(default=0, ge=0)
    following: int = Field(default=0, ge=0)

class UserRecord(User):
    """Stored form of a user."""
    password_hash: str = Field(..., min_length=1)

    def to_public(self) -> User:
        return User(**self.model_dump(exclude={"password_hash"}))

class TokenClaims(BaseModel):
    sub: str
    iat: int
    exp: int
    iss: Optional[str] = None
    aud: Optional[str] = None
    jti: Optional[str] = None

# ---------- Ports (Contracts) ----------
class TokenIssuerPort(Protocol):
    """
    Contract for minting and validating bearer tokens.
    `validate` raises AuthenticationError and otherwise returns the subject id.
    """
    def issue(self, subject_id: str, ttl: Optional[int] = None) -> str: ...
    def validate(self, token: str) -> str: ...

class PasswordHasherPort(Protocol):
    def hash(self, plaintext: str, rounds: Optional[int] = None) -> str: ...
    def verify(self, plaintext: str, hashed: str) -> bool: ...

class UserStorePort(Protocol):
    """
    Contract for the credential store. `insert` is the authority on
    username/email uniqueness and raises ConflictError on a duplicate.
    """
    def find_by_username_or_email(self, username: str, email: str) -> Optional[UserRecord]: ...
    def find_by_username(self, username: str) -> Optional[UserRecord]: ...
    def get_by_id(self, user_id: str) -> Optional[UserRecord]: ...
    def insert(self, username: str, email: str, password_hash: str) -> UserRecord: ...
    def increment_video_count(self, user_id: str) -> None: ...

# ---------- Service I/O ----------
# Fields are optional so that missing values reach the service's own
# validation and surface as 400 VALIDATION instead of a schema error.
class RegisterRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None

class AuthResult(BaseModel):
    token: str
    token_type: Literal["Bearer"] = "Bearer"
    expires_in: int
    user: User

class MeResponse(BaseModel):
    user: User

# ---------- Errors ----------
class AuthErrorCodes:
    MISSING_FIELDS = "MISSING_FIELDS"
    PASSWORD_TOO_LONG = "PASSWORD_TOO_LONG"
    USER_EXISTS = "USER_EXISTS"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    BAD_CREDENTIALS = "BAD_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    MISSING_TOKEN = "MISSING_TOKEN"
    INVALID_ENCODING = "INVALID_ENCODING"
