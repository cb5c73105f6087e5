"""End-to-end campaigns driven through the engine."""

from __future__ import annotations

import pytest

from bastion.domain import commands as cmd
from bastion.domain import models as dm
from bastion.domain import raids
from bastion.domain.engine import GameEngine
from bastion.domain.enums import BuildingKind, UnitKind, UnitState
from bastion.domain.seed_data import CAPITAL_TILE_ID, new_world


@pytest.fixture
def engine() -> GameEngine:
    return GameEngine(new_world(dm.GameID(1), seed=2024))


def _accepted(engine: GameEngine, command: cmd.Command) -> cmd.CommandResult:
    result = engine.submit(command)
    assert result.accepted, result.log
    return result


def test_farm_on_owned_tile(engine):
    rejected = engine.submit(cmd.ConstructBuilding(dm.TileID(2), BuildingKind.FARM))
    assert not rejected.accepted

    engine.state.tiles[dm.TileID(4)].is_owned = True
    _accepted(engine, cmd.ConstructBuilding(dm.TileID(4), BuildingKind.FARM))

    building = engine.state.tiles[dm.TileID(4)].building
    assert engine.state.ledger.wood == 100
    assert building == dm.Building(kind=BuildingKind.FARM, level=1, production={"food": 10})


def test_soldier_trains_then_conquers_north_forest(engine):
    _accepted(engine, cmd.TrainUnit(CAPITAL_TILE_ID, UnitKind.SOLDIER))
    _accepted(engine, cmd.EndTurn())
    unit = engine.state.units[dm.UnitID("unit-1")]
    assert unit.state == UnitState.TRAINING
    assert unit.turns_to_train == 1

    _accepted(engine, cmd.EndTurn())
    assert engine.state.units[dm.UnitID("unit-1")].state == UnitState.IDLE

    result = _accepted(engine, cmd.AttackTile(dm.UnitID("unit-1"), dm.TileID(2)))
    forest = engine.state.tiles[dm.TileID(2)]
    assert forest.is_owned
    assert forest.enemy_threat == 0
    assert engine.state.ledger.valor == 10
    assert "VICTORY! SOLDIER 1 conquered North Forest." in result.log


def test_weak_garrison_is_overrun():
    world = new_world(dm.GameID(1), seed=1)
    world.turn = 8
    world.units[dm.UnitID("unit-1")] = dm.Unit(
        id=dm.UnitID("unit-1"),
        kind=UnitKind.SOLDIER,
        name="Militia",
        combat_power=10,
        upkeep=1,
        location=CAPITAL_TILE_ID,
    )
    world.tiles[CAPITAL_TILE_ID].garrison = dm.UnitID("unit-1")
    world.raids.append(dm.ScheduledAttack(CAPITAL_TILE_ID, attack_turn=9, threat_level=15))
    engine = GameEngine(world)

    result = _accepted(engine, cmd.EndTurn())

    capital = engine.state.tiles[CAPITAL_TILE_ID]
    assert not capital.is_owned
    assert capital.garrison is None
    assert engine.state.units == {}
    assert "Capital City was overrun! 1 unit(s) lost." in result.log


def test_garrison_holds_scheduled_raid(engine):
    _accepted(engine, cmd.TrainUnit(CAPITAL_TILE_ID, UnitKind.SOLDIER))
    _accepted(engine, cmd.EndTurn())
    _accepted(engine, cmd.EndTurn())
    _accepted(engine, cmd.AttackTile(dm.UnitID("unit-1"), dm.TileID(4)))
    _accepted(engine, cmd.ConstructBuilding(dm.TileID(4), BuildingKind.FARM))
    assert engine.state.ledger.wood == 99

    _accepted(engine, cmd.EndTurn())
    assert engine.state.ledger.food == 20
    _accepted(engine, cmd.TrainUnit(CAPITAL_TILE_ID, UnitKind.SOLDIER))
    _accepted(engine, cmd.EndTurn())
    _accepted(engine, cmd.EndTurn())
    assert engine.state.turn == 5

    assert len(engine.state.raids) == 1
    raid = engine.state.raids[0]
    assert raid.attack_turn == 9
    assert raid.threat_level == raids.raid_threat(4)

    # gather both soldiers on the targeted tile
    mover = dm.UnitID("unit-2") if raid.target_tile_id == dm.TileID(4) else dm.UnitID("unit-1")
    _accepted(engine, cmd.MoveUnit(mover, raid.target_tile_id))

    while engine.state.turn < 9:
        _accepted(engine, cmd.EndTurn())

    target = engine.state.tiles[raid.target_tile_id]
    assert target.is_owned
    assert engine.state.raids == []
    assert engine.state.ledger.valor == 15
    assert len(engine.state.units) == 2
    assert all(unit.location == raid.target_tile_id for unit in engine.state.units.values())
    assert engine.state.ledger.shields == 110


def test_replay_is_deterministic():
    script = [
        cmd.TrainUnit(CAPITAL_TILE_ID, UnitKind.SOLDIER),
        cmd.EndTurn(),
        cmd.EndTurn(),
        cmd.AttackTile(dm.UnitID("unit-1"), dm.TileID(4)),
        *[cmd.EndTurn() for _ in range(8)],
    ]

    first = GameEngine(new_world(dm.GameID(1), seed=99))
    second = GameEngine(new_world(dm.GameID(1), seed=99))
    first.submit_many(script)
    second.submit_many(script)

    assert first.state == second.state
