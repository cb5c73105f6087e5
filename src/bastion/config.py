"""Lightweight configuration for the Bastion server."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Minimal application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    data_dir: Path = Field(default=Path("games"), description="Where JSON world snapshots live")
    storage_backend: Literal["json", "sqlite"] = Field(
        default="json", description="Persistence backend for world snapshots"
    )
    database_url: str = Field(
        default="sqlite:///games/bastion.db",
        description="SQLAlchemy URL used when storage_backend is 'sqlite'",
    )
    default_seed: int = Field(default=0, description="Seed for new worlds when none is given")
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    settings = Settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
