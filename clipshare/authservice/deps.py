from typing import Optional

from fastapi import Depends, Header, Request

from .contracts import AuthErrorCodes, User
from .errors import make_auth_error
from .service import AuthService


def get_auth_service(request: Request) -> AuthService:
    """The AuthService installed on the app by the composition root."""
    return request.app.state.auth_service


def get_authorization_header(authorization: Optional[str] = Header(default=None, alias="Authorization")) -> Optional[str]:
    """
    Extract the Authorization header value (e.g., 'Bearer <token>').
    Using Header() ensures we get a plain string during real FastAPI requests.
    """
    return authorization


def require_user(
    auth: AuthService = Depends(get_auth_service),
    authorization: Optional[str] = Depends(get_authorization_header),
) -> User:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise make_auth_error(AuthErrorCodes.MISSING_TOKEN, "Missing or invalid Authorization header")

    token = authorization.split(" ", 1)[1].strip()
    return auth.verify_token(token)
