# filmoteka/core/config.py
from __future__ import annotations

"""
# Filmoteka: Centralized Configuration (Pydantic v2)

Strongly-typed, environment-driven settings for the catalog API.

## Goals
- Safe defaults for local/dev; explicit where prod needs secrets.
- One place that knows how to build database DSNs.
- Session cookie knobs (name, TTL, secure flag) live next to Redis settings.

## Usage
    from filmoteka.core.config import Settings, settings

The module-level `settings` is only the default. Runtime components receive
their settings through the composition root (`create_app(settings=...)`).
"""

from datetime import timedelta
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()  # harmless in prod; convenient in dev


# ─────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────
class Settings(BaseSettings):
    """
    Global application settings sourced from environment.

    Sessions:
        - Opaque cookie tokens stored in Redis with a sliding TTL.
        - `SESSION_TTL_HOURS` applies both to the Redis key and the cookie.

    Database:
        - PostgreSQL via asyncpg by default.
        - `DATABASE_URL_OVERRIDE` accepts any async SQLAlchemy DSN
          (handy for `sqlite+aiosqlite:///./dev.db` in local runs).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # don't crash on unknown keys
    )

    # ── App meta ──────────────────────────────────────────────
    PROJECT_NAME: str = "Filmoteka API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    ENV: Literal["development", "staging", "production"] = "development"
    ENABLE_DOCS: bool = True

    # ── Redis (session store) ─────────────────────────────────
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_CONNECT_ATTEMPTS: int = Field(5, ge=1, le=20)
    REDIS_SOCKET_TIMEOUT: float = Field(3.0, gt=0)
    REDIS_MAX_CONNECTIONS: int = Field(64, ge=1)

    # ── Database (PostgreSQL) ─────────────────────────────────
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: SecretStr = SecretStr("postgres")
    POSTGRES_DB: str = "filmoteka"
    DATABASE_URL_OVERRIDE: Optional[str] = None

    DB_POOL_SIZE: int = Field(10, ge=1, le=100)
    DB_MAX_OVERFLOW: int = Field(20, ge=0, le=200)
    DB_POOL_TIMEOUT: int = Field(30, ge=1, le=300)
    DB_POOL_RECYCLE: int = Field(1800, ge=60)
    DB_ECHO: bool = False

    # ── Sessions ──────────────────────────────────────────────
    SESSION_COOKIE_NAME: str = "session_id"
    SESSION_TTL_HOURS: int = Field(48, ge=1, le=24 * 30)
    SESSION_COOKIE_SECURE: bool = False

    # ── Validators / normalizers ──────────────────────────────
    @field_validator("API_PREFIX", mode="before")
    @classmethod
    def _normalize_prefix(cls, v: str | None) -> str:
        s = (v or "").strip().rstrip("/")
        if s and not s.startswith("/"):
            s = "/" + s
        return s

    @field_validator("DATABASE_URL_OVERRIDE", mode="before")
    @classmethod
    def _blank_override_is_none(cls, v):
        return None if v is None or not str(v).strip() else str(v).strip()

    # ── Derived / convenience properties ─────────────────────
    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"

    @property
    def session_ttl(self) -> timedelta:
        return timedelta(hours=self.SESSION_TTL_HOURS)

    @property
    def DATABASE_URL(self) -> str:
        """Sync DSN."""
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD.get_secret_value()}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def ASYNC_DATABASE_URL(self) -> str:
        """Async SQLAlchemy DSN (override wins)."""
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return self.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)


# Default instance (composition root may pass its own)
settings = Settings()

__all__ = ["Settings", "settings"]
