"""Enumerations used across the Bastion domain."""

from __future__ import annotations

from enum import StrEnum


class ResourceKind(StrEnum):
    """Resources tracked by the ledger."""

    SHIELDS = "shields"
    FOOD = "food"
    WOOD = "wood"
    STONE = "stone"
    METAL = "metal"
    PETRICITE = "petricite"
    VALOR = "valor"


class TerrainKind(StrEnum):
    """Tile terrain. Currently cosmetic."""

    PLAINS = "PLAINS"
    FOREST = "FOREST"
    MOUNTAIN = "MOUNTAIN"
    PETRICITE_GROVE = "PETRICITE_GROVE"


class BuildingKind(StrEnum):
    """Buildings that can stand on a tile."""

    FARM = "FARM"
    LUMBERMILL = "LUMBERMILL"
    QUARRY = "QUARRY"
    BARRACKS = "BARRACKS"
    TOWN_CENTER = "TOWN_CENTER"


class UnitKind(StrEnum):
    """Trainable military units."""

    SOLDIER = "SOLDIER"
    RANGER = "RANGER"
    CHAMPION = "CHAMPION"


class UnitState(StrEnum):
    """Lifecycle states a unit moves through."""

    IDLE = "IDLE"
    TRAINING = "TRAINING"
    MOVING = "MOVING"


class MatchOutcome(StrEnum):
    """Result of an external match, converted into shields."""

    WIN = "WIN"
    LOSS = "LOSS"
