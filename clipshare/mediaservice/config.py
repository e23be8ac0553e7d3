
from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional

class MediaSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    MEDIA_HOST: str = Field(default="localfs")  # "localfs" | "s3"
    # Local FS
    MEDIA_LOCAL_ROOT: str = Field(default="./var/media")
    MEDIA_PUBLIC_BASE_URL: Optional[str] = None
    # S3
    AWS_REGION: Optional[str] = None
    S3_BUCKET: Optional[str] = None
    S3_ENDPOINT_URL: Optional[str] = None
    S3_FORCE_PATH_STYLE: bool = False
    S3_KEY_PREFIX: str = Field(default="videos")
    # Upload policy
    UPLOAD_TIMEOUT_SECONDS: float = Field(default=120.0, gt=0)
    MAX_UPLOAD_BYTES: int = Field(default=100 * 1024 * 1024, gt=0)  # 100 MiB
