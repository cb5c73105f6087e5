"""Dataclasses describing the Bastion world.

The world is a single aggregate (:class:`WorldState`) holding the resource
ledger, the tile map, the army and the queue of scheduled raids.  Rule
modules receive the aggregate explicitly; nothing in the domain layer keeps
global state.  Persistence adapters serialize the aggregate through pydantic
``TypeAdapter`` so every type here must stay pydantic-friendly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Literal, NewType

from pydantic import Field

from .enums import BuildingKind, ResourceKind, TerrainKind, UnitKind, UnitState

# --- Strongly typed identifiers -------------------------------------------------

GameID = NewType("GameID", int)
TileID = NewType("TileID", int)
UnitID = NewType("UnitID", str)

ResourceVector = dict[ResourceKind, int]


# --- Resources ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Ledger:
    """Quantities of every resource kind.

    Only ``food`` may legitimately dip below zero (starvation signal).
    """

    shields: int = 0
    food: int = 0
    wood: int = 0
    stone: int = 0
    metal: int = 0
    petricite: int = 0
    valor: int = 0

    def get(self, kind: ResourceKind) -> int:
        return getattr(self, ResourceKind(kind).value)

    def as_dict(self) -> dict[str, int]:
        return {kind.value: self.get(kind) for kind in ResourceKind}


# --- Map ------------------------------------------------------------------------


@dataclass(slots=True)
class Building:
    """Building standing on a tile."""

    kind: BuildingKind
    level: int = 1
    production: ResourceVector = field(default_factory=dict)


@dataclass(slots=True)
class Tile:
    """Map tile. ``garrison`` is a unit id token, not an ownership link."""

    id: TileID
    name: str
    terrain: TerrainKind
    is_owned: bool = False
    building: Building | None = None
    enemy_threat: int = 0
    garrison: UnitID | None = None


# --- Units ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Idle:
    tag: Literal["idle"] = "idle"


@dataclass(frozen=True, slots=True)
class Training:
    turns_left: int
    tag: Literal["training"] = "training"


@dataclass(frozen=True, slots=True)
class Moving:
    destination: TileID
    tag: Literal["moving"] = "moving"


UnitStatus = Annotated[Idle | Training | Moving, Field(discriminator="tag")]

_STATE_BY_STATUS: dict[type, UnitState] = {
    Idle: UnitState.IDLE,
    Training: UnitState.TRAINING,
    Moving: UnitState.MOVING,
}


@dataclass(slots=True)
class Unit:
    """Military unit. Tracks its own location by tile id."""

    id: UnitID
    kind: UnitKind
    name: str
    combat_power: int
    upkeep: int
    location: TileID
    status: UnitStatus = field(default_factory=Idle)

    @property
    def state(self) -> UnitState:
        return _STATE_BY_STATUS[type(self.status)]

    @property
    def turns_to_train(self) -> int | None:
        return self.status.turns_left if isinstance(self.status, Training) else None

    @property
    def destination(self) -> TileID | None:
        return self.status.destination if isinstance(self.status, Moving) else None


# --- Scheduling -----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ScheduledAttack:
    """Enemy raid due against ``target_tile_id`` on ``attack_turn``."""

    target_tile_id: TileID
    attack_turn: int
    threat_level: int


# --- Aggregate ------------------------------------------------------------------


@dataclass(slots=True)
class WorldState:
    """Root aggregate owned by the turn engine."""

    game_id: GameID
    seed: int
    turn: int
    ledger: Ledger
    tiles: dict[TileID, Tile] = field(default_factory=dict)
    units: dict[UnitID, Unit] = field(default_factory=dict)
    raids: list[ScheduledAttack] = field(default_factory=list)
    notifications: list[str] = field(default_factory=list)
    unit_serial: int = 0


@dataclass(frozen=True, slots=True)
class WorldSnapshot:
    """Read-only view handed to presentation code."""

    game_id: GameID
    turn: int
    ledger: Ledger
    tiles: tuple[Tile, ...]
    units: tuple[Unit, ...]
    notifications: tuple[str, ...]
