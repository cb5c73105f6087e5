"""Coordinating owner of a single world."""

from __future__ import annotations

import copy
import logging
import threading

from .commands import Command, CommandResult, apply_command
from .models import WorldSnapshot, WorldState
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


class GameEngine:
    """Holds the current world and publishes a new one after each command.

    Commands are applied one at a time under a lock; readers always see a
    complete world, never one half way through a transition.
    """

    def __init__(self, state: WorldState, *, rules: RulesConfig = DEFAULT_RULES) -> None:
        self._state = state
        self._rules = rules
        self._lock = threading.Lock()

    @property
    def state(self) -> WorldState:
        return self._state

    @property
    def rules(self) -> RulesConfig:
        return self._rules

    def submit(self, command: Command) -> CommandResult:
        """Apply ``command`` and publish the resulting world."""

        with self._lock:
            result = apply_command(self._state, command, rules=self._rules)
            self._state = result.state
        return result

    def submit_many(self, commands: list[Command]) -> list[CommandResult]:
        return [self.submit(command) for command in commands]

    def snapshot(self) -> WorldSnapshot:
        """Return a detached, read-only view of the current world."""

        state = self._state
        return WorldSnapshot(
            game_id=state.game_id,
            turn=state.turn,
            ledger=state.ledger,
            tiles=tuple(copy.deepcopy(list(state.tiles.values()))),
            units=tuple(copy.deepcopy(list(state.units.values()))),
            notifications=tuple(state.notifications),
        )
