"""Scheduling and resolution of enemy raids against owned tiles."""

from __future__ import annotations

from bastion.utils.rng import generate_seed, random_choice

from . import combat
from .models import ScheduledAttack, WorldState
from .rules_config import DEFAULT_RULES, RulesConfig


def is_raid_turn(turn: int, *, rules: RulesConfig = DEFAULT_RULES) -> bool:
    """Raids are planned when ``(turn + offset) % cadence == 0``."""

    raid_rules = rules.raids
    return (turn + raid_rules.cadence_offset) % raid_rules.cadence_turns == 0


def raid_threat(turn: int, *, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Threat grows linearly with the turn the raid is planned on."""

    return rules.raids.base_threat + turn * rules.raids.threat_per_turn


def plan_raid(state: WorldState, *, rules: RulesConfig = DEFAULT_RULES) -> ScheduledAttack | None:
    """Pick a target among owned tiles if this turn is a raid turn.

    Uses ``state.turn`` as the current (pre-increment) turn.
    """

    if not is_raid_turn(state.turn, rules=rules):
        return None
    owned = [tile.id for tile in state.tiles.values() if tile.is_owned]
    if not owned:
        return None

    seed = generate_seed(state.seed, state.turn, "raid_target")
    target = random_choice(seed, owned)["choice"]
    return ScheduledAttack(
        target_tile_id=target,
        attack_turn=state.turn + rules.raids.lead_turns,
        threat_level=raid_threat(state.turn, rules=rules),
    )


def schedule_raids(state: WorldState, *, rules: RulesConfig = DEFAULT_RULES) -> list[str]:
    """Enqueue at most one raid for the current turn; return log lines."""

    raid = plan_raid(state, rules=rules)
    if raid is None:
        return []
    state.raids.append(raid)
    tile = state.tiles[raid.target_tile_id]
    return [
        f"Scouts report an enemy force massing against {tile.name} "
        f"(threat {raid.threat_level}, arriving turn {raid.attack_turn})."
    ]


def resolve_due_raids(
    state: WorldState,
    turn: int,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[str]:
    """Resolve and dequeue every raid whose attack turn equals ``turn``."""

    due = [raid for raid in state.raids if raid.attack_turn == turn]
    if not due:
        return []
    state.raids = [raid for raid in state.raids if raid.attack_turn != turn]

    lines: list[str] = []
    for raid in due:
        tile = state.tiles.get(raid.target_tile_id)
        if tile is None or not tile.is_owned:
            name = tile.name if tile is not None else f"tile {raid.target_tile_id}"
            lines.append(f"The raid on {name} found nothing left to attack.")
            continue
        defenders = combat.garrison_units(state, tile.id)
        result = combat.resolve_raid(raid, defenders)
        lines.extend(combat.apply_raid(state, raid, result, rules=rules))
    return lines
