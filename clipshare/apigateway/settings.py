from __future__ import annotations
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .. import __version__

APP_NAME = "clipshare-api"

class GatewaySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    APP_VERSION: str = Field(default=__version__)
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=5000)
    LOG_LEVEL: str = Field(default="INFO")
    CORS_ORIGINS: str = Field(default="*")  # comma separated
    # Storage
    STORE_BACKEND: str = Field(default="memory")  # "memory" | "mongo"
    MONGODB_URI: str = Field(default="mongodb://localhost:27017")
    MONGODB_DB: str = Field(default="clipshare")
    MONGODB_TIMEOUT_MS: int = Field(default=5000, gt=0)

    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
