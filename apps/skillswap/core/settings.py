from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DB_PATH = Path(__file__).resolve().parents[1] / "skillswap.db"


class Settings(BaseSettings):
    """Unified application settings for SkillSwap.

    Loads from env with support for repo ".env" files. Avoids manual load_dotenv().
    """

    _app_env = (os.getenv("APP_ENV") or "").strip().lower()
    _env_files = (
        []
        if _app_env in {"test", "ci"}
        else [
            str((Path(__file__).resolve().parents[1] / ".env")),  # apps/skillswap/.env
            str((Path(__file__).resolve().parents[3] / ".env")),  # repo root .env
        ]
    )

    model_config = SettingsConfigDict(
        env_file=_env_files,
        case_sensitive=False,
        extra="ignore",
    )

    # --- App / Core ---
    app_name: str = Field(default="skillswap", alias="APP_NAME")
    debug: bool = Field(default=False, alias="DEBUG")
    # Log level comes from SKILLSWAP_LOG_LEVEL / LOG_LEVEL (see skillswap.core.logging).

    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")

    cors_allow_origins: list[str] = Field(default=["*"], alias="CORS_ALLOW_ORIGINS")

    # Database
    database_url: str = Field(
        default=f"sqlite:///{DEFAULT_DB_PATH}",
        alias="DATABASE_URL",
    )

    # Document collections
    users_collection: str = Field(default="users", alias="USERS_COLLECTION")
    messages_collection: str = Field(default="messages", alias="MESSAGES_COLLECTION")
    classes_collection: str = Field(default="classes", alias="CLASSES_COLLECTION")

    # Realtime (Socket.IO)
    socketio_path: str = Field(default="socket.io", alias="SOCKETIO_PATH")

    # Class expiry sweeper
    class_retention_hours: int = Field(
        default=24,
        alias="CLASS_RETENTION_HOURS",
        ge=1,
        le=24 * 365,
        description="Classes scheduled more than this many hours ago are deleted.",
    )
    class_sweep_interval_seconds: int = Field(
        default=60 * 60,
        alias="CLASS_SWEEP_INTERVAL_SECONDS",
        ge=1,
    )
    enable_class_sweeper: bool = Field(
        default=True,
        alias="ENABLE_CLASS_SWEEPER",
        description="Run the sweeper inside the API process (startup + every interval).",
    )
    enable_class_sweeper_beat: bool = Field(
        default=False,
        alias="ENABLE_CLASS_SWEEPER_BEAT",
        description="Schedule the sweeper through Celery beat instead of the API process.",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


# Convenience singleton for modules expecting a module-level "settings"
settings = get_settings()
