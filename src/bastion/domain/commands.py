"""Player commands and their state transitions.

Every command is applied as ``(old_state, command) -> CommandResult``: the
old state is never mutated.  Accepted commands work on a deep copy; rejected
commands return a copy whose only change is one extra notification.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from . import combat, ledger, notifications, turn, validation
from .catalog import building_spec, unit_spec
from .enums import BuildingKind, MatchOutcome, ResourceKind, UnitKind
from .models import Building, Moving, TileID, Training, Unit, UnitID, WorldState
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


# --- Command types --------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ReportMatchResult:
    outcome: MatchOutcome


@dataclass(frozen=True, slots=True)
class EndTurn:
    pass


@dataclass(frozen=True, slots=True)
class ConstructBuilding:
    tile_id: TileID
    building: BuildingKind


@dataclass(frozen=True, slots=True)
class TrainUnit:
    tile_id: TileID
    unit: UnitKind


@dataclass(frozen=True, slots=True)
class AttackTile:
    unit_id: UnitID
    tile_id: TileID


@dataclass(frozen=True, slots=True)
class MoveUnit:
    unit_id: UnitID
    tile_id: TileID


Command = ReportMatchResult | EndTurn | ConstructBuilding | TrainUnit | AttackTile | MoveUnit


@dataclass(slots=True)
class CommandResult:
    """New world state plus the log lines the command produced."""

    state: WorldState
    accepted: bool
    log: list[str] = field(default_factory=list)


CommandHandler = Callable[[WorldState, "Command", RulesConfig], CommandResult]


def apply_command(
    state: WorldState,
    command: Command,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> CommandResult:
    """Dispatch ``command`` to its registered handler."""

    handler = _COMMAND_HANDLERS.get(type(command))
    if handler is None:
        raise ValueError(f"unsupported command type: {type(command).__name__}")
    result = handler(state, command, rules)
    if result.accepted:
        logger.info("game %s: %s accepted", int(state.game_id), type(command).__name__)
    else:
        logger.debug("game %s: %s rejected: %s", int(state.game_id), command, result.log)
    return result


# ---------------------------------------------------------------------------
# Registered command handlers


def _handle_match_result(
    state: WorldState, command: ReportMatchResult, rules: RulesConfig
) -> CommandResult:
    economy = rules.economy
    outcome = MatchOutcome(command.outcome)
    reward = economy.match_win_shields if outcome == MatchOutcome.WIN else economy.match_loss_shields

    working = _clone(state)
    before = working.ledger.shields
    working.ledger = ledger.credit_shields(reward, working.ledger, cap=economy.shield_cap)
    gained = working.ledger.shields - before
    return _accept(working, [f"External match result: {outcome}. Gained {gained} shields."], rules)


def _handle_end_turn(state: WorldState, command: EndTurn, rules: RulesConfig) -> CommandResult:  # noqa: ARG001
    verdict = validation.check_end_turn(state, rules=rules)
    if not verdict.allowed:
        return _reject(state, verdict, rules)

    working = _clone(state)
    log = turn.run_end_turn(working, rules=rules)
    logger.info("game %s advanced to turn %s", int(working.game_id), working.turn)
    return _accept(working, log, rules)


def _handle_construct(
    state: WorldState, command: ConstructBuilding, rules: RulesConfig
) -> CommandResult:
    kind = BuildingKind(command.building)
    verdict = validation.check_build(state, command.tile_id, kind, rules=rules)
    if not verdict.allowed:
        return _reject(state, verdict, rules)

    spec = building_spec(kind)
    working = _clone(state)
    tile = working.tiles[command.tile_id]
    working.ledger = ledger.debit(spec.cost, working.ledger)
    tile.building = Building(kind=kind, level=1, production=dict(spec.production))
    return _accept(working, [f"Built {kind} on {tile.name}."], rules)


def _handle_train(state: WorldState, command: TrainUnit, rules: RulesConfig) -> CommandResult:
    kind = UnitKind(command.unit)
    verdict = validation.check_train(state, command.tile_id, kind)
    if not verdict.allowed:
        return _reject(state, verdict, rules)

    spec = unit_spec(kind)
    working = _clone(state)
    tile = working.tiles[command.tile_id]
    cost = dict(spec.cost)
    if not rules.economy.debit_training_food:
        cost.pop(ResourceKind.FOOD, None)
    working.ledger = ledger.debit(cost, working.ledger, allow_negative={ResourceKind.FOOD})

    working.unit_serial += 1
    unit = Unit(
        id=UnitID(f"unit-{working.unit_serial}"),
        kind=kind,
        name=f"{kind} {len(working.units) + 1}",
        combat_power=spec.combat_power,
        upkeep=spec.upkeep,
        location=tile.id,
        status=Training(spec.training_turns),
    )
    working.units[unit.id] = unit
    line = (
        f"Started training a {kind} at {tile.name}. "
        f"Training will take {spec.training_turns} turns."
    )
    return _accept(working, [line], rules)


def _handle_attack(state: WorldState, command: AttackTile, rules: RulesConfig) -> CommandResult:
    verdict = validation.check_attack(state, command.unit_id, command.tile_id)
    if not verdict.allowed:
        return _reject(state, verdict, rules)

    working = _clone(state)
    unit = working.units[command.unit_id]
    threat = working.tiles[command.tile_id].enemy_threat
    swing = combat.roll_swing(working, unit.id, command.tile_id, rules=rules)
    result = combat.resolve_assault(unit, threat, swing=swing)
    log = combat.apply_assault(working, unit.id, command.tile_id, result, rules=rules)
    return _accept(working, log, rules)


def _handle_move(state: WorldState, command: MoveUnit, rules: RulesConfig) -> CommandResult:
    verdict = validation.check_move(state, command.unit_id, command.tile_id)
    if not verdict.allowed:
        return _reject(state, verdict, rules)

    working = _clone(state)
    unit = working.units[command.unit_id]
    destination = working.tiles[command.tile_id]
    unit.status = Moving(destination.id)
    return _accept(working, [f"{unit.name} is marching to {destination.name}."], rules)


_COMMAND_HANDLERS: dict[type, CommandHandler] = {
    ReportMatchResult: _handle_match_result,
    EndTurn: _handle_end_turn,
    ConstructBuilding: _handle_construct,
    TrainUnit: _handle_train,
    AttackTile: _handle_attack,
    MoveUnit: _handle_move,
}


def _clone(state: WorldState) -> WorldState:
    return copy.deepcopy(state)


def _accept(working: WorldState, log: list[str], rules: RulesConfig) -> CommandResult:
    notifications.record(working, log, window=rules.notifications.window)
    return CommandResult(state=working, accepted=True, log=log)


def _reject(state: WorldState, verdict: validation.Verdict, rules: RulesConfig) -> CommandResult:
    working = _clone(state)
    reason = verdict.reason or "Command rejected."
    notifications.record(working, [reason], window=rules.notifications.window)
    return CommandResult(state=working, accepted=False, log=[reason])
