from __future__ import annotations
import logging
from typing import Optional

from ..errors import ClipshareError, InternalError
from .config import AuthConfig
from .contracts import (
    AuthErrorCodes, AuthResult, LoginRequest, PasswordHasherPort, RegisterRequest,
    TokenIssuerPort, User, UserRecord, UserStorePort,
)
from .errors import make_auth_error, make_conflict_error, make_validation_error
from .models import BCRYPT_MAX_SECRET_BYTES

log = logging.getLogger("authservice")

class AuthService:
    """
    Registration and login on top of a credential store, a password hasher
    and a token issuer. Holds no per-request state.
    """
    def __init__(
        self,
        *,
        user_store: UserStorePort,
        hasher: PasswordHasherPort,
        issuer: TokenIssuerPort,
        cfg: Optional[AuthConfig] = None,
    ):
        self.user_store = user_store
        self.hasher = hasher
        self.issuer = issuer
        self.cfg = cfg or AuthConfig()

    # --------- Core operations ----------
    def register(self, req: RegisterRequest) -> AuthResult:
        username, email, password = req.username, req.email, req.password
        if not _filled(username) or not _filled(email) or not _filled(password):
            raise make_validation_error(AuthErrorCodes.MISSING_FIELDS, "All fields required")
        _utf8("username", username)
        _utf8("email", email)
        if len(_utf8("password", password)) > BCRYPT_MAX_SECRET_BYTES:
            raise make_validation_error(
                AuthErrorCodes.PASSWORD_TOO_LONG,
                f"Password must be at most {BCRYPT_MAX_SECRET_BYTES} bytes",
            )

        try:
            # fast path only; the store's insert has the final word on uniqueness
            if self.user_store.find_by_username_or_email(username, email):
                raise make_conflict_error(AuthErrorCodes.USER_EXISTS, "User already exists")
            pw_hash = self.hasher.hash(password)
            record = self.user_store.insert(username, email, pw_hash)
            result = self._issue_for_user(record)
        except ClipshareError as ex:
            log.info("auth.register rejected username=%s code=%s", username, ex.code)
            raise
        except Exception as ex:
            log.exception("auth.register err username=%s", username)
            raise InternalError("Registration failed") from ex

        log.info("auth.register ok user_id=%s username=%s", record.id, username)
        return result

    def login(self, req: LoginRequest) -> AuthResult:
        username, password = req.username or "", req.password or ""
        try:
            record = self.user_store.find_by_username(username) if username else None
            if not record:
                raise self._login_error(AuthErrorCodes.USER_NOT_FOUND, "User not found")
            if not self.hasher.verify(password, record.password_hash):
                raise self._login_error(AuthErrorCodes.INVALID_PASSWORD, "Invalid password")
            result = self._issue_for_user(record)
        except ClipshareError as ex:
            log.info("auth.login rejected username=%s code=%s", username, ex.code)
            raise
        except Exception as ex:
            log.exception("auth.login err username=%s", username)
            raise InternalError("Login failed") from ex

        log.info("auth.login ok user_id=%s", record.id)
        return result

    def verify_token(self, token: str) -> User:
        user_id = self.issuer.validate(token)
        record = self.user_store.get_by_id(user_id)
        if not record:
            raise make_auth_error(AuthErrorCodes.INVALID_TOKEN, "Unknown user")
        return record.to_public()

    # --------- Helpers ----------
    def _issue_for_user(self, record: UserRecord) -> AuthResult:
        token = self.issuer.issue(record.id, self.cfg.TOKEN_TTL_SECONDS)
        return AuthResult(token=token, expires_in=self.cfg.TOKEN_TTL_SECONDS, user=record.to_public())

    def _login_error(self, code: str, message: str):
        if self.cfg.GENERIC_LOGIN_ERRORS:
            return make_auth_error(AuthErrorCodes.BAD_CREDENTIALS, "Invalid username or password")
        return make_auth_error(code, message)

def _filled(value: Optional[str]) -> bool:
    return bool(value and value.strip())

def _utf8(field: str, value: str) -> bytes:
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError:
        raise make_validation_error(
            AuthErrorCodes.INVALID_ENCODING, f"{field} must be valid UTF-8 text"
        ) from None
