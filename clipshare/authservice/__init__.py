from .service import AuthService
from .crypto import JWTTokenIssuer
from .models import PasswordHasher, InMemoryUserStore
from .store_mongo import MongoUserStore
from .config import AuthConfig
from .deps import get_auth_service, require_user
from .routes import router as auth_router

__all__ = [
    "AuthService",
    "JWTTokenIssuer",
    "PasswordHasher",
    "InMemoryUserStore",
    "MongoUserStore",
    "AuthConfig",
    "get_auth_service",
    "require_user",
    "auth_router",
]
