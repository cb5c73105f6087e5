"""End-of-turn resolution pipeline."""

from __future__ import annotations

from dataclasses import replace

from . import combat, ledger, raids
from .enums import ResourceKind
from .models import Idle, Moving, Training, WorldState
from .rules_config import DEFAULT_RULES, RulesConfig


def run_end_turn(state: WorldState, *, rules: RulesConfig = DEFAULT_RULES) -> list[str]:
    """Advance ``state`` by one turn in place and return the turn log.

    The shield gate is the caller's job (see
    :func:`bastion.domain.validation.check_end_turn`).  Steps run in a fixed
    order: shield cost, production, (optional upkeep), training, movement,
    raid scheduling, raid resolution, turn increment.
    """

    log: list[str] = []
    log += _pay_turn_cost(state, rules)
    log += _collect_production(state)
    if rules.economy.charge_upkeep:
        log += _charge_upkeep(state)
    log += _check_food(state)
    log += _advance_training(state)
    log += _advance_movement(state)
    log += raids.schedule_raids(state, rules=rules)
    log += raids.resolve_due_raids(state, state.turn + 1, rules=rules)

    state.turn += 1
    log.append(f"Turn {state.turn} begins.")
    return log


def _pay_turn_cost(state: WorldState, rules: RulesConfig) -> list[str]:
    cost = rules.economy.turn_cost_shields
    state.ledger = ledger.debit({ResourceKind.SHIELDS: cost}, state.ledger)
    return [f"Deducted {cost} shields for ending turn."]


def _collect_production(state: WorldState) -> list[str]:
    lines: list[str] = []
    for tile in state.tiles.values():
        if not tile.is_owned or tile.building is None:
            continue
        for kind, amount in tile.building.production.items():
            state.ledger = ledger.credit({kind: amount}, state.ledger)
            lines.append(f"Gained {amount} {kind} from {tile.name}'s {tile.building.kind}.")
    return lines


def _charge_upkeep(state: WorldState) -> list[str]:
    total = sum(unit.upkeep for unit in state.units.values())
    if total <= 0:
        return []
    state.ledger = replace(state.ledger, food=state.ledger.food - total)
    return [f"Paid {total} food for unit upkeep."]


def _check_food(state: WorldState) -> list[str]:
    if state.ledger.food < 0:
        return ["WARNING: Food shortage! Your army has outgrown its food supply."]
    return []


def _advance_training(state: WorldState) -> list[str]:
    lines: list[str] = []
    for unit in state.units.values():
        if not isinstance(unit.status, Training):
            continue
        turns_left = unit.status.turns_left - 1
        if turns_left <= 0:
            unit.status = Idle()
            lines.append(f"{unit.name} has finished training and is now IDLE!")
        else:
            unit.status = Training(turns_left)
            lines.append(f"{unit.name} is training ({turns_left} turns left).")
    return lines


def _advance_movement(state: WorldState) -> list[str]:
    lines: list[str] = []
    for unit in state.units.values():
        if not isinstance(unit.status, Moving):
            continue
        origin = unit.location
        destination = state.tiles[unit.status.destination]
        unit.location = destination.id
        unit.status = Idle()
        combat.reassign_garrison(state, origin)
        if destination.garrison is None:
            destination.garrison = unit.id
        lines.append(f"{unit.name} arrived at {destination.name}.")
    return lines
