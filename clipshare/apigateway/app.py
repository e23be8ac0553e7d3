from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pymongo import MongoClient

from ..authservice import AuthConfig, AuthService, InMemoryUserStore, JWTTokenIssuer, MongoUserStore, PasswordHasher, auth_router
from ..authservice.contracts import UserStorePort
from ..catalog import InMemoryVideoRepo, MongoVideoRepo, VideoCatalog, catalog_router
from ..catalog.contracts import VideoRepoPort
from ..contracts import UWFResponse, uwf_ok
from ..mediaservice import MediaSettings, MediaUploadService, make_media_host, media_router
from ..mediaservice.ports import MediaHostPort
from .handlers import install_error_handlers
from .observability import RequestContextMiddleware
from .settings import APP_NAME, GatewaySettings

logger = logging.getLogger("apigateway")

@dataclass
class Container:
    """Everything the routes need, built once per process."""
    auth_service: AuthService
    upload_service: MediaUploadService
    catalog: VideoCatalog
    closers: List[Callable[[], Any]] = field(default_factory=list)

    def close(self) -> None:
        for close in reversed(self.closers):
            try:
                close()
            except Exception:
                logger.exception("container.close err")
        self.closers.clear()

def build_container(
    settings: Optional[GatewaySettings] = None,
    auth_cfg: Optional[AuthConfig] = None,
    media_cfg: Optional[MediaSettings] = None,
    *,
    media_host: Optional[MediaHostPort] = None,
) -> Container:
    settings = settings or GatewaySettings()
    auth_cfg = auth_cfg or AuthConfig()
    media_cfg = media_cfg or MediaSettings()
    closers: List[Callable[[], Any]] = []

    users: UserStorePort
    videos: VideoRepoPort
    backend = settings.STORE_BACKEND.lower()
    if backend == "memory":
        users, videos = InMemoryUserStore(), InMemoryVideoRepo()
    elif backend == "mongo":
        client = MongoClient(settings.MONGODB_URI, tz_aware=True, serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS)
        closers.append(client.close)
        db = client[settings.MONGODB_DB]
        users, videos = MongoUserStore(db["users"]), MongoVideoRepo(db["videos"])
        users.ensure_indexes()
        videos.ensure_indexes()
    else:
        raise RuntimeError(f"Unknown STORE_BACKEND: {settings.STORE_BACKEND}")

    host = media_host or make_media_host(media_cfg)
    closers.append(host.close)

    issuer = JWTTokenIssuer(
        auth_cfg.JWT_SECRET,
        ttl_seconds=auth_cfg.TOKEN_TTL_SECONDS,
        alg=auth_cfg.JWT_ALG,
        issuer=auth_cfg.AUTH_ISSUER,
        audience=auth_cfg.AUTH_AUDIENCE,
    )
    auth = AuthService(
        user_store=users,
        hasher=PasswordHasher(rounds=auth_cfg.BCRYPT_ROUNDS),
        issuer=issuer,
        cfg=auth_cfg,
    )
    uploads = MediaUploadService(
        host=host,
        videos=videos,
        users=users,
        timeout_seconds=media_cfg.UPLOAD_TIMEOUT_SECONDS,
        max_upload_bytes=media_cfg.MAX_UPLOAD_BYTES,
        key_prefix=media_cfg.S3_KEY_PREFIX,
    )
    logger.info("container.built store=%s media_host=%s", backend, host.name)
    return Container(auth_service=auth, upload_service=uploads, catalog=VideoCatalog(videos), closers=closers)

def create_app(container: Optional[Container] = None, settings: Optional[GatewaySettings] = None) -> FastAPI:
    settings = settings or GatewaySettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # a container passed in by the caller is owned by the caller
        owned = container is None
        c = container or build_container(settings)
        app.state.auth_service = c.auth_service
        app.state.upload_service = c.upload_service
        app.state.catalog = c.catalog
        try:
            yield
        finally:
            if owned:
                c.close()

    app = FastAPI(title=APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)
    install_error_handlers(app)

    # Routers
    app.include_router(auth_router)
    app.include_router(media_router)
    app.include_router(catalog_router)

    @app.get("/health", response_model=UWFResponse)
    def health(request: Request):
        return uwf_ok(request, {
            "status": "ok",
            "version": settings.APP_VERSION,
            "time": datetime.now(timezone.utc).isoformat(),
        })

    return app
