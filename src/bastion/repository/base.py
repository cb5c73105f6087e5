"""Repository contract shared by every persistence backend."""

from __future__ import annotations

from typing import Protocol

from pydantic import TypeAdapter

from bastion.domain import models as dm

WORLD_ADAPTER: TypeAdapter[dm.WorldState] = TypeAdapter(dm.WorldState)


class GameNotFoundError(LookupError):
    """Raised when a requested game has no stored snapshot."""

    def __init__(self, game_id: dm.GameID) -> None:
        super().__init__(f"game {int(game_id)} not found")
        self.game_id = game_id


class GameRepository(Protocol):
    """Protocol for storing and retrieving world snapshots."""

    def save(self, state: dm.WorldState) -> object:
        """Persist ``state``, replacing any earlier snapshot of the same game."""
        ...

    def load(self, game_id: dm.GameID) -> dm.WorldState:
        """Return the stored world or raise :class:`GameNotFoundError`."""
        ...

    def list_games(self) -> list[dm.GameID]:
        """Return every stored game id in ascending order."""
        ...

    def delete(self, game_id: dm.GameID) -> None:
        """Remove a stored game if present."""
        ...
