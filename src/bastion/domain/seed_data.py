"""Initial world: the fixed five-tile map and the starting ledger."""

from __future__ import annotations

from .catalog import building_spec
from .enums import BuildingKind, TerrainKind
from .models import Building, GameID, Ledger, Tile, TileID, WorldState
from .rules_config import DEFAULT_RULES

CAPITAL_TILE_ID = TileID(DEFAULT_RULES.economy.capital_tile_id)


def starting_ledger() -> Ledger:
    return Ledger(shields=200, food=5, wood=150, stone=50)


def starting_tiles() -> list[Tile]:
    """The fixed map. Only the capital starts owned."""

    town_center = building_spec(BuildingKind.TOWN_CENTER)
    return [
        Tile(
            id=CAPITAL_TILE_ID,
            name="Capital City",
            terrain=TerrainKind.PLAINS,
            is_owned=True,
            building=Building(
                kind=BuildingKind.TOWN_CENTER,
                level=1,
                production=dict(town_center.production),
            ),
        ),
        Tile(id=TileID(2), name="North Forest", terrain=TerrainKind.FOREST, enemy_threat=10),
        Tile(id=TileID(3), name="Iron Peak", terrain=TerrainKind.MOUNTAIN, enemy_threat=25),
        Tile(id=TileID(4), name="Whispering Plains", terrain=TerrainKind.PLAINS, enemy_threat=5),
        Tile(
            id=TileID(5),
            name="Petricite Grove",
            terrain=TerrainKind.PETRICITE_GROVE,
            enemy_threat=40,
        ),
    ]


def new_world(game_id: GameID, *, seed: int = 0) -> WorldState:
    """Create a fresh world at turn 0."""

    return WorldState(
        game_id=game_id,
        seed=seed,
        turn=0,
        ledger=starting_ledger(),
        tiles={tile.id: tile for tile in starting_tiles()},
    )
