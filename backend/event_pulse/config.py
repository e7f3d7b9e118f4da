"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - database_url defaults to a SQLite file inside the local app data directory
    - The data directory is created on first use, never at import time

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - XDG_DATA_HOME honoured, ~/.local/share otherwise: the embedded store lives
      where the platform expects per-user application data
"""

import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Local data directory could not be resolved or created."""


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="EVENT_PULSE_", case_sensitive=False,
    )

    # Storage
    data_dir_name: str = "event_pulse"
    db_filename: str = "event_pulse.db"
    database_url: str | None = None
    database_echo: bool = False

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_sqlite_url(cls, v: str | None) -> str | None:
        """Plain sqlite:// URLs need the aiosqlite driver for the async engine."""
        if isinstance(v, str) and v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v

    # Identifiers
    event_id_prefix: str = "EVNT"
    notify_id_prefix: str = "NTFY"

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        db_path = local_app_data_dir(self.data_dir_name) / self.db_filename
        return f"sqlite+aiosqlite:///{db_path}"


def local_app_data_dir(dir_name: str) -> Path:
    """Return (creating if needed) the per-user data directory for `dir_name`."""
    base = os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share"
    path = Path(base) / dir_name
    if path.exists():
        logger.info(f"Local application data directory '{path}' already exists.")
        return path
    try:
        path.mkdir(parents=True)
    except OSError as e:
        raise ConfigError(f"Failed to create directory: {e}") from e
    logger.info(f"Local application data directory '{path}' created successfully.")
    return path


@lru_cache
def get_settings() -> Settings:
    return Settings()
