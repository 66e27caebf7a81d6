"""
sakhi_api.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration (prefix `SAKHI_`).
    Defaults are safe for local dev; prod must override `jwt_secret`.
    """

    model_config = SettingsConfigDict(env_prefix="SAKHI_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "sakhi-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 5000
    # Browser frontends are served from another origin.
    cors_origins: list[str] = ["*"]

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "sakhi-api"
    jwt_audience: str = "sakhi-clients"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    token_ttl_minutes: int = Field(default=7 * 24 * 60, ge=1)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./sakhi.db"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Settings are read once at startup; `create_app` derives the token codec from them
# so request-time code never reaches back into the environment.
