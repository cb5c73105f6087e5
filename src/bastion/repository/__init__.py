"""Persistence adapters for Bastion worlds."""

from __future__ import annotations

from bastion.config import Settings
from bastion.repository.base import GameNotFoundError, GameRepository
from bastion.repository.json_store import JsonGameRepository
from bastion.repository.sql_store import SqlGameRepository


def create_repository(settings: Settings) -> GameRepository:
    """Build the repository selected by ``settings.storage_backend``."""

    if settings.storage_backend == "sqlite":
        return SqlGameRepository(settings.database_url)
    return JsonGameRepository(settings.data_dir)


__all__ = [
    "GameNotFoundError",
    "GameRepository",
    "JsonGameRepository",
    "SqlGameRepository",
    "create_repository",
]
