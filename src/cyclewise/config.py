"""Process-level settings loaded from environment variables."""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration read from ``CYCLEWISE_*`` environment variables (or .env)."""

    log_level: str = "INFO"

    # Overrides the bundled engine_config.yaml when set
    engine_config_path: Path | None = None

    model_config = SettingsConfigDict(
        env_prefix="CYCLEWISE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Install the stdout log handler used by host applications.

    The engine itself never calls this; importing cyclewise leaves logging
    configuration to the embedding process.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
