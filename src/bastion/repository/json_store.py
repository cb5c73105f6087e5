"""JSON-based repository for Bastion worlds."""

from __future__ import annotations

import logging
from pathlib import Path

from bastion.domain import models as dm
from bastion.repository.base import WORLD_ADAPTER, GameNotFoundError

logger = logging.getLogger(__name__)


class JsonGameRepository:
    """Persist worlds as JSON snapshots on disk."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _path_for(self, game_id: dm.GameID) -> Path:
        return self.base_path / f"game_{int(game_id)}.json"

    def save(self, state: dm.WorldState) -> Path:
        """Serialize a world to disk and return the snapshot path."""

        path = self._path_for(state.game_id)
        path.write_bytes(WORLD_ADAPTER.dump_json(state, indent=2))
        return path

    def load(self, game_id: dm.GameID) -> dm.WorldState:
        """Load a previously saved world."""

        path = self._path_for(game_id)
        if not path.exists():
            raise GameNotFoundError(game_id)
        return WORLD_ADAPTER.validate_json(path.read_bytes())

    def list_games(self) -> list[dm.GameID]:
        """Return all game ids currently persisted in the repository."""

        ids: list[dm.GameID] = []
        prefix = "game_"
        suffix = ".json"
        for path in self.base_path.glob("game_*.json"):
            name = path.name
            raw = name[len(prefix) : -len(suffix)]
            try:
                ids.append(dm.GameID(int(raw)))
            except ValueError:
                logger.warning("ignoring malformed snapshot name %s", name)
        return sorted(ids, key=int)

    def delete(self, game_id: dm.GameID) -> None:
        """Remove a world snapshot if it exists."""

        path = self._path_for(game_id)
        if path.exists():
            path.unlink()
