"""Declarative rule configuration for the turn engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EconomyRules:
    """Shield economy and food handling."""

    turn_cost_shields: int = 10
    shield_cap: int = 2000
    match_win_shields: int = 300
    match_loss_shields: int = 150
    capital_tile_id: int = 1
    charge_upkeep: bool = False
    debit_training_food: bool = True


@dataclass(frozen=True, slots=True)
class CombatRules:
    """Assault and raid defence parameters."""

    conquest_valor: int = 10
    defense_valor: int = 5
    variance: int = 0  # max +/- swing added to an assault margin


@dataclass(frozen=True, slots=True)
class RaidRules:
    """Cadence and strength of scheduled enemy raids."""

    cadence_turns: int = 10
    cadence_offset: int = 6
    lead_turns: int = 5
    base_threat: int = 15
    threat_per_turn: int = 2


@dataclass(frozen=True, slots=True)
class NotificationRules:
    """Size of the rolling notification window."""

    window: int = 5


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    economy: EconomyRules = EconomyRules()
    combat: CombatRules = CombatRules()
    raids: RaidRules = RaidRules()
    notifications: NotificationRules = NotificationRules()


DEFAULT_RULES = RulesConfig()
