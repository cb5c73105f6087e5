"""Combat resolution: player assaults on enemy tiles and raid defence."""

from __future__ import annotations

from dataclasses import dataclass, replace

from bastion.utils.rng import generate_seed, random_int

from .models import Idle, ScheduledAttack, TileID, Unit, UnitID, WorldState
from .rules_config import DEFAULT_RULES, RulesConfig


@dataclass(frozen=True, slots=True)
class AssaultResult:
    """Outcome of one unit attacking one tile."""

    won: bool
    power: int
    threat: int
    swing: int = 0

    @property
    def margin(self) -> int:
        return self.power - self.threat + self.swing


@dataclass(frozen=True, slots=True)
class RaidResult:
    """Outcome of a scheduled raid against a garrison."""

    held: bool
    defense: int
    threat: int
    defenders: tuple[UnitID, ...]


def roll_swing(
    state: WorldState,
    unit_id: UnitID,
    tile_id: TileID,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> int:
    """Seeded variance added to an assault margin; zero when variance is off."""

    variance = rules.combat.variance
    if variance <= 0:
        return 0
    seed = generate_seed(state.seed, state.turn, f"assault:{unit_id}:{int(tile_id)}")
    return random_int(seed, -variance, variance)["value"]


def resolve_assault(unit: Unit, threat: int, *, swing: int = 0) -> AssaultResult:
    """Attacker wins iff ``power - threat + swing >= 0``."""

    margin = unit.combat_power - threat + swing
    return AssaultResult(won=margin >= 0, power=unit.combat_power, threat=threat, swing=swing)


def apply_assault(
    state: WorldState,
    unit_id: UnitID,
    tile_id: TileID,
    result: AssaultResult,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[str]:
    """Apply an assault result to ``state`` in place and return log lines."""

    unit = state.units[unit_id]
    tile = state.tiles[tile_id]
    lines = [f"{unit.name} (Power: {result.power}) attacks {tile.name} (Threat: {result.threat})."]

    if result.won:
        origin = unit.location
        unit.location = tile.id
        unit.status = Idle()
        reassign_garrison(state, origin)

        tile.is_owned = True
        tile.enemy_threat = 0
        tile.building = None
        tile.garrison = unit.id

        reward = rules.combat.conquest_valor
        state.ledger = replace(state.ledger, valor=state.ledger.valor + reward)
        lines.append(f"VICTORY! {unit.name} conquered {tile.name}.")
        lines.append(f"Gained {reward} Valor.")
    else:
        del state.units[unit_id]
        reassign_garrison(state, unit.location)
        lines.append(f"DEFEAT! {unit.name} was defeated at {tile.name}.")
        lines.append(f"{unit.name} was lost in combat.")
    return lines


def garrison_units(state: WorldState, tile_id: TileID) -> list[Unit]:
    """Every unit located at ``tile_id``, whatever its state."""

    return [unit for unit in state.units.values() if unit.location == tile_id]


def resolve_raid(raid: ScheduledAttack, defenders: list[Unit]) -> RaidResult:
    """The garrison holds iff its summed combat power meets the raid threat."""

    defense = sum(unit.combat_power for unit in defenders)
    return RaidResult(
        held=defense >= raid.threat_level,
        defense=defense,
        threat=raid.threat_level,
        defenders=tuple(unit.id for unit in defenders),
    )


def apply_raid(
    state: WorldState,
    raid: ScheduledAttack,
    result: RaidResult,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[str]:
    """Apply a raid result to ``state`` in place and return log lines."""

    tile = state.tiles[raid.target_tile_id]
    lines = [f"Enemy raid on {tile.name}! Threat {result.threat} vs defense {result.defense}."]

    if result.held:
        reward = rules.combat.defense_valor
        state.ledger = replace(state.ledger, valor=state.ledger.valor + reward)
        lines.append(f"{tile.name} held against the raid. Gained {reward} Valor.")
        return lines

    tile.is_owned = False
    tile.building = None
    tile.garrison = None
    for unit_id in result.defenders:
        state.units.pop(unit_id, None)
    lines.append(f"{tile.name} was overrun! {len(result.defenders)} unit(s) lost.")
    return lines


def reassign_garrison(state: WorldState, tile_id: TileID) -> None:
    """Point a tile's garrison at a unit still located there, or clear it."""

    tile = state.tiles.get(tile_id)
    if tile is None or tile.garrison is None:
        return
    current = state.units.get(tile.garrison)
    if current is not None and current.location == tile_id:
        return
    remaining = garrison_units(state, tile_id)
    tile.garrison = remaining[0].id if remaining else None
