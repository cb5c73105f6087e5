"""Static building and unit tables."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from .enums import BuildingKind, ResourceKind, UnitKind


@dataclass(frozen=True, slots=True)
class BuildingSpec:
    """Construction cost and per-turn production of a building kind."""

    cost: MappingProxyType
    production: MappingProxyType


@dataclass(frozen=True, slots=True)
class UnitSpec:
    """Training cost, duration and combat profile of a unit kind."""

    cost: MappingProxyType
    training_turns: int
    combat_power: int
    upkeep: int


def _vector(**amounts: int) -> MappingProxyType:
    return MappingProxyType({ResourceKind(kind): amount for kind, amount in amounts.items()})


BUILDING_CATALOG: MappingProxyType = MappingProxyType(
    {
        BuildingKind.FARM: BuildingSpec(cost=_vector(wood=50), production=_vector(food=10)),
        BuildingKind.LUMBERMILL: BuildingSpec(cost=_vector(wood=75), production=_vector(wood=10)),
        BuildingKind.QUARRY: BuildingSpec(cost=_vector(wood=100), production=_vector(stone=10)),
        BuildingKind.BARRACKS: BuildingSpec(
            cost=_vector(wood=150, stone=50), production=_vector(valor=5)
        ),
        BuildingKind.TOWN_CENTER: BuildingSpec(
            cost=_vector(wood=200, stone=100), production=_vector(food=5, wood=2)
        ),
    }
)

UNIT_CATALOG: MappingProxyType = MappingProxyType(
    {
        UnitKind.SOLDIER: UnitSpec(
            cost=_vector(food=10, wood=5), training_turns=2, combat_power=20, upkeep=1
        ),
        UnitKind.RANGER: UnitSpec(
            cost=_vector(food=15, wood=10), training_turns=3, combat_power=25, upkeep=2
        ),
        UnitKind.CHAMPION: UnitSpec(
            cost=_vector(food=50, metal=20, petricite=10),
            training_turns=5,
            combat_power=60,
            upkeep=5,
        ),
    }
)

TRAINING_BUILDINGS: frozenset[BuildingKind] = frozenset(
    {BuildingKind.TOWN_CENTER, BuildingKind.BARRACKS}
)


def building_spec(kind: BuildingKind | str) -> BuildingSpec:
    """Look up a building kind, rejecting unknown names."""

    return BUILDING_CATALOG[BuildingKind(kind)]


def unit_spec(kind: UnitKind | str) -> UnitSpec:
    """Look up a unit kind, rejecting unknown names."""

    return UNIT_CATALOG[UnitKind(kind)]
