"""Runtime primitives backing the Bastion HTTP API."""

from __future__ import annotations

import asyncio
import logging

from pydantic import ValidationError

from bastion.config import Settings, get_settings
from bastion.domain import models as dm
from bastion.domain.commands import Command, CommandResult
from bastion.domain.engine import GameEngine
from bastion.domain.rules_config import DEFAULT_RULES, RulesConfig
from bastion.domain.seed_data import new_world
from bastion.repository import GameNotFoundError, GameRepository, create_repository

logger = logging.getLogger(__name__)


class GameService:
    """Loads worlds, routes commands to their engines and persists results."""

    def __init__(
        self,
        repository: GameRepository,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        default_seed: int = 0,
    ) -> None:
        self._repository = repository
        self._rules = rules
        self._default_seed = default_seed
        self._engines: dict[dm.GameID, GameEngine] = {}
        self._command_lock = asyncio.Lock()

    def list_games(self) -> list[dm.WorldState]:
        """Return every readable world ordered by identifier.

        Snapshots that fail to load are logged and skipped.
        """

        games: list[dm.WorldState] = []
        for game_id in self._repository.list_games():
            try:
                games.append(self.get_game(game_id))
            except (ValidationError, OSError) as exc:
                logger.warning("skipping unreadable snapshot for game %s: %s", int(game_id), exc)
        return games

    def get_game(self, game_id: dm.GameID) -> dm.WorldState:
        """Return the current world or raise ``GameNotFoundError``."""

        return self._engine_for(game_id).state

    def create_game(self, *, seed: int | None = None) -> dm.WorldState:
        """Create and persist a fresh world."""

        game_id = self._next_identifier()
        state = new_world(game_id, seed=self._default_seed if seed is None else seed)
        self._repository.save(state)
        self._engines[game_id] = GameEngine(state, rules=self._rules)
        logger.info("created game %s (seed %s)", int(game_id), state.seed)
        return state

    async def delete_game(self, game_id: dm.GameID) -> None:
        """Remove a game once no command on it is in flight."""

        async with self._command_lock:
            if game_id not in self._engines and game_id not in self._repository.list_games():
                raise GameNotFoundError(game_id)
            self._engines.pop(game_id, None)
            self._repository.delete(game_id)

    async def execute(self, game_id: dm.GameID, command: Command) -> CommandResult:
        """Apply one command to a game and persist the new world."""

        async with self._command_lock:
            return await asyncio.to_thread(self._execute_sync, game_id, command)

    def _execute_sync(self, game_id: dm.GameID, command: Command) -> CommandResult:
        engine = self._engine_for(game_id)
        result = engine.submit(command)
        self._repository.save(result.state)
        return result

    def _engine_for(self, game_id: dm.GameID) -> GameEngine:
        engine = self._engines.get(game_id)
        if engine is None:
            engine = GameEngine(self._repository.load(game_id), rules=self._rules)
            self._engines[game_id] = engine
        return engine

    def _next_identifier(self) -> dm.GameID:
        existing = set(self._repository.list_games()) | set(self._engines)
        if not existing:
            return dm.GameID(1)
        return dm.GameID(max(int(game_id) for game_id in existing) + 1)

    @staticmethod
    def to_summary_dict(state: dm.WorldState) -> dict[str, object]:
        """Return a JSON-friendly overview of a world."""

        return {
            "id": int(state.game_id),
            "turn": state.turn,
            "shields": state.ledger.shields,
            "owned_tiles": sum(1 for tile in state.tiles.values() if tile.is_owned),
            "unit_count": len(state.units),
        }

    @staticmethod
    def to_detail_dict(state: dm.WorldState) -> dict[str, object]:
        """Return the full read-only snapshot clients render from."""

        return {
            "id": int(state.game_id),
            "turn": state.turn,
            "resources": state.ledger.as_dict(),
            "tiles": [GameService.to_tile_dict(tile) for tile in state.tiles.values()],
            "units": [GameService.to_unit_dict(unit) for unit in state.units.values()],
            "notifications": list(state.notifications),
        }

    @staticmethod
    def to_tile_dict(tile: dm.Tile) -> dict[str, object]:
        building = tile.building
        return {
            "id": int(tile.id),
            "name": tile.name,
            "terrain": str(tile.terrain),
            "is_owned": tile.is_owned,
            "building": (
                {
                    "kind": str(building.kind),
                    "level": building.level,
                    "production": {str(k): v for k, v in building.production.items()},
                }
                if building is not None
                else None
            ),
            "enemy_threat": tile.enemy_threat,
            "garrison": tile.garrison,
        }

    @staticmethod
    def to_unit_dict(unit: dm.Unit) -> dict[str, object]:
        return {
            "id": unit.id,
            "kind": str(unit.kind),
            "name": unit.name,
            "combat_power": unit.combat_power,
            "upkeep": unit.upkeep,
            "location": int(unit.location),
            "state": str(unit.state),
            "turns_to_train": unit.turns_to_train,
            "destination": int(unit.destination) if unit.destination is not None else None,
        }


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self, *, settings: Settings | None = None, rules: RulesConfig = DEFAULT_RULES
    ) -> None:
        self.settings = settings or get_settings()
        self.repository = create_repository(self.settings)
        self.rules = rules
        self.games = GameService(
            self.repository,
            rules=rules,
            default_seed=self.settings.default_seed,
        )

    async def shutdown(self) -> None:
        dispose = getattr(self.repository, "dispose", None)
        if dispose is not None:
            dispose()


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
