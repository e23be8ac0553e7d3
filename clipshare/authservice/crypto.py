from __future__ import annotations
import logging
import uuid
from typing import Optional

import jwt

from ..contracts import ClockPort, SystemClock
from .contracts import AuthErrorCodes, TokenClaims, TokenIssuerPort
from .errors import make_auth_error

log = logging.getLogger("authservice")

class JWTTokenIssuer(TokenIssuerPort):
    """
    HS256 bearer tokens via PyJWT.

    Expiry is checked against the injected clock rather than PyJWT's own
    wall-clock check, so tests can move time forward.
    """
    def __init__(
        self,
        secret: str,
        *,
        ttl_seconds: int = 86400,
        alg: str = "HS256",
        issuer: Optional[str] = None,
        audience: Optional[str] = None,
        clock: Optional[ClockPort] = None,
    ):
        if not secret:
            raise ValueError("JWTTokenIssuer requires non-empty secret")
        self._secret = secret
        self._alg = alg
        self.ttl_seconds = ttl_seconds
        self.issuer = issuer
        self.audience = audience
        self.clock = clock or SystemClock()

    def issue(self, subject_id: str, ttl: Optional[int] = None) -> str:
        now = self.clock.now_utc_ts()
        claims = TokenClaims(
            sub=str(subject_id),
            iat=now,
            exp=now + (ttl if ttl is not None else self.ttl_seconds),
            iss=self.issuer,
            aud=self.audience,
            jti=uuid.uuid4().hex,
        )
        return jwt.encode(claims.model_dump(exclude_none=True), self._secret, algorithm=self._alg)

    def validate(self, token: str) -> str:
        if not token:
            raise make_auth_error(AuthErrorCodes.MISSING_TOKEN, "Missing token")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._alg],
                audience=self.audience,
                issuer=self.issuer,
                options={"require": ["sub", "iat", "exp"], "verify_exp": False, "verify_iat": False},
            )
            claims = TokenClaims(**payload)
        except (jwt.InvalidTokenError, ValueError) as ex:
            log.info("auth.token rejected reason=%s", ex)
            raise make_auth_error(AuthErrorCodes.INVALID_TOKEN, "Invalid token")

        if self.clock.now_utc_ts() >= claims.exp:
            raise make_auth_error(AuthErrorCodes.TOKEN_EXPIRED, "Token expired")
        return claims.sub
