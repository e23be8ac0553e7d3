from __future__ import annotations
from typing import Optional

from .config import MediaSettings
from .contracts import PutMediaRequest, UploadedMedia, UploadResult
from .errors import MediaConflict, MediaHostError, MediaUpstream, MediaValidation
from .ports import MediaHostPort
from .adapters import LocalFSMediaHost, S3MediaHost
from .service import MediaUploadService
from .routes import router as media_router

def make_media_host(cfg: Optional[MediaSettings] = None) -> MediaHostPort:
    cfg = cfg or MediaSettings()
    if cfg.MEDIA_HOST.lower() == "localfs":
        return LocalFSMediaHost(cfg.MEDIA_LOCAL_ROOT, public_base_url=cfg.MEDIA_PUBLIC_BASE_URL)
    elif cfg.MEDIA_HOST.lower() == "s3":
        if not cfg.S3_BUCKET:
            raise RuntimeError("S3_BUCKET is required for the s3 media host")
        return S3MediaHost(
            bucket=cfg.S3_BUCKET,
            region=cfg.AWS_REGION,
            endpoint_url=cfg.S3_ENDPOINT_URL,
            force_path_style=cfg.S3_FORCE_PATH_STYLE,
            public_base_url=cfg.MEDIA_PUBLIC_BASE_URL,
        )
    else:
        raise RuntimeError(f"Unknown MEDIA_HOST: {cfg.MEDIA_HOST}")

__all__ = [
    "MediaSettings",
    "PutMediaRequest",
    "UploadedMedia",
    "UploadResult",
    "MediaConflict",
    "MediaHostError",
    "MediaUpstream",
    "MediaValidation",
    "MediaHostPort",
    "LocalFSMediaHost",
    "S3MediaHost",
    "MediaUploadService",
    "media_router",
    "make_media_host",
]
