from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DB_PATH = Path(__file__).resolve().parents[1] / "collabcanvas.db"


class Settings(BaseSettings):
    """Application settings for the CollabCanvas server and client.

    Loads from env with support for repo ".env" files. Avoids manual load_dotenv().
    """

    _app_env = (os.getenv("APP_ENV") or "").strip().lower()
    _env_files = (
        []
        if _app_env in {"test", "ci"}
        else [
            str((Path(__file__).resolve().parents[1] / ".env")),  # apps/collabcanvas/.env
            str((Path(__file__).resolve().parents[3] / ".env")),  # repo root .env
        ]
    )

    model_config = SettingsConfigDict(
        env_file=_env_files,
        case_sensitive=False,
        extra="ignore",
    )

    # --- App / Core ---
    app_env: str = Field(default="dev", alias="APP_ENV")
    app_name: str = Field(default="collabcanvas", alias="APP_NAME")
    debug: bool = Field(default=False, alias="DEBUG")
    # Logging
    log_level: str | None = Field(default=None, alias="COLLABCANVAS_LOG_LEVEL")
    log_level_fallback: str | None = Field(default=None, alias="LOG_LEVEL")

    cors_allow_origins: list[str] = Field(default=["*"], alias="CORS_ALLOW_ORIGINS")

    # --- Server ---
    server_host: str = Field(default="0.0.0.0", alias="SERVER_HOST")
    server_port: int = Field(default=2022, alias="SERVER_PORT", ge=1, le=65535)
    rpc_prefix: str = Field(default="/trpc", alias="RPC_PREFIX")

    # Database
    database_url: str = Field(
        default=f"sqlite:///{DEFAULT_DB_PATH}",
        alias="DATABASE_URL",
    )
    db_echo: bool = Field(default=False, alias="DB_ECHO")

    # --- Collaboration ---
    cursor_ttl_seconds: int = Field(
        default=30,
        alias="CURSOR_TTL_SECONDS",
        ge=1,
        description="Cursors not refreshed within this window are left out of reads.",
    )
    cursor_poll_interval_seconds: float = Field(
        default=1.0,
        alias="CURSOR_POLL_INTERVAL_SECONDS",
        gt=0,
    )

    @property
    def effective_log_level(self) -> str | None:
        return self.log_level or self.log_level_fallback


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
