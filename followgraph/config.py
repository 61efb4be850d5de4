"""Application configuration settings."""
from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment configuration for the followgraph backend."""

    app_env: str = "dev"
    database_url: str = "sqlite:///followgraph.db"
    SECRET_KEY: str = "change-me"
    LOG_LEVEL: str = "INFO"
    CORS_ALLOW_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    SENTRY_DSN: str | None = None
    PROMETHEUS_ENABLED: bool = True
    ALLOW_DB_CREATE_ALL: bool = False

    # --- Social graph ----------------------------------------------------
    DEFAULT_PAGE_LIMIT: int = 3
    USERS_PAGE_LIMIT: int = 6
    MAX_PAGE_LIMIT: int = 100
    ALLOW_SELF_FOLLOW: bool = False

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("SENTRY_DSN")
    @classmethod
    def _strip_empty_dsn(cls, value: str | None) -> str | None:
        """Normalise empty DSNs to ``None`` so Sentry stays disabled."""

        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None

    @field_validator("DEFAULT_PAGE_LIMIT", "USERS_PAGE_LIMIT", "MAX_PAGE_LIMIT")
    @classmethod
    def _positive_limit(cls, value: int) -> int:
        if value < 1:
            raise ValueError("page limits must be >= 1")
        return value


class AppInfo(BaseModel):
    name: str = "followgraph-backend"
    version: str = "0.1.0"


settings = Settings()


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return settings


__all__ = ["Settings", "AppInfo", "settings", "get_settings"]
