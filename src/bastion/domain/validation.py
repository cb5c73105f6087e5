"""Preconditions for every player command.

Each ``check_*`` function is a pure predicate over the world state.  A
failing check yields exactly one human-readable reason; the caller turns it
into a notification and leaves the world untouched.
"""

from __future__ import annotations

from dataclasses import dataclass

from .catalog import TRAINING_BUILDINGS, building_spec, unit_spec
from .enums import BuildingKind, ResourceKind, UnitKind, UnitState
from .ledger import Shortfall, shortfalls
from .models import TileID, UnitID, WorldState
from .rules_config import DEFAULT_RULES, RulesConfig


@dataclass(frozen=True, slots=True)
class Verdict:
    """Outcome of a precondition check."""

    allowed: bool
    reason: str | None = None


ALLOWED = Verdict(True)


def _deny(reason: str) -> Verdict:
    return Verdict(False, reason)


def _describe_shortfalls(missing: list[Shortfall], action: str) -> str:
    parts = [f"{s.kind} (needed {s.needed}, have {s.available})" for s in missing]
    return f"Not enough resources to {action}: " + ", ".join(parts) + "."


def check_build(
    state: WorldState,
    tile_id: TileID,
    kind: BuildingKind,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Verdict:
    tile = state.tiles.get(tile_id)
    if tile is None:
        return _deny(f"Tile {tile_id} does not exist.")
    if not tile.is_owned:
        return _deny(f"Cannot build on unowned tile: {tile.name}.")
    if tile.building is not None:
        return _deny(f"{tile.name} already has a building.")
    if tile.id == rules.economy.capital_tile_id:
        return _deny(f"Cannot build on {tile.name}: the capital cannot be rebuilt.")

    missing = shortfalls(building_spec(kind).cost, state.ledger)
    if missing:
        return _deny(_describe_shortfalls(missing, f"build {kind}"))
    return ALLOWED


def check_train(state: WorldState, tile_id: TileID, kind: UnitKind) -> Verdict:
    """Training needs an owned tile with a Town Center or Barracks.

    Food is population capacity: it caps the unit count and is skipped by
    the affordability check.
    """

    tile = state.tiles.get(tile_id)
    if tile is None or not tile.is_owned:
        return _deny(f"Cannot train units at unowned or non-existent tile {tile_id}.")
    if tile.building is None or tile.building.kind not in TRAINING_BUILDINGS:
        return _deny(
            f"No suitable building (Town Center or Barracks) at {tile.name} to train {kind}."
        )

    capacity = state.ledger.food
    if len(state.units) >= capacity:
        return _deny(f"Army is at population capacity ({len(state.units)}/{capacity}).")

    missing = shortfalls(unit_spec(kind).cost, state.ledger, exempt={ResourceKind.FOOD})
    if missing:
        return _deny(_describe_shortfalls(missing, f"train {kind}"))
    return ALLOWED


def check_attack(state: WorldState, unit_id: UnitID, tile_id: TileID) -> Verdict:
    unit = state.units.get(unit_id)
    if unit is None or unit.state != UnitState.IDLE:
        return _deny("Attacking unit not found or not idle.")

    tile = state.tiles.get(tile_id)
    if tile is None:
        return _deny(f"Tile {tile_id} does not exist.")
    if tile.is_owned:
        return _deny(f"Cannot attack {tile.name}: it is already yours.")
    if tile.enemy_threat <= 0:
        return _deny(f"Cannot attack {tile.name}: there is no enemy there.")
    return ALLOWED


def check_move(state: WorldState, unit_id: UnitID, tile_id: TileID) -> Verdict:
    unit = state.units.get(unit_id)
    if unit is None or unit.state != UnitState.IDLE:
        return _deny("Unit not found or not idle.")

    tile = state.tiles.get(tile_id)
    if tile is None:
        return _deny(f"Tile {tile_id} does not exist.")
    if not tile.is_owned:
        return _deny(f"Cannot move to {tile.name}: units may only move to owned tiles.")
    if unit.location == tile.id:
        return _deny(f"{unit.name} is already at {tile.name}.")
    return ALLOWED


def check_end_turn(state: WorldState, *, rules: RulesConfig = DEFAULT_RULES) -> Verdict:
    cost = rules.economy.turn_cost_shields
    if state.ledger.shields < cost:
        return _deny(
            f"Not enough shields to end turn! Needed: {cost}, Have: {state.ledger.shields}."
        )
    return ALLOWED
