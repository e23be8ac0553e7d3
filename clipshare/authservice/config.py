from __future__ import annotations
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class AuthConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    JWT_ALG: str = Field(default="HS256")
    JWT_SECRET: str = Field(default="change-me-dev-secret")
    TOKEN_TTL_SECONDS: int = Field(default=86400, gt=0)  # 24 hours
    BCRYPT_ROUNDS: int = Field(default=10, ge=4, le=31)
    AUTH_ISSUER: str = Field(default="clipshare")
    AUTH_AUDIENCE: str = Field(default="clipshare-clients")
    # single "Invalid username or password" message for both login failures
    GENERIC_LOGIN_ERRORS: bool = False
