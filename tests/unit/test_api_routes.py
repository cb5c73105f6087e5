"""Tests for the FastAPI layer."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from bastion.api.app import create_app
from bastion.api.runtime import ApiState
from bastion.config import Settings
from bastion.domain import models as dm
from bastion.repository import JsonGameRepository


def _make_app(tmp_path):
    def factory() -> ApiState:
        return ApiState(settings=Settings(data_dir=tmp_path, default_seed=4))

    app = create_app(state_factory=factory)
    transport = ASGITransport(app=app)
    return app, transport


async def _create_game(client: AsyncClient) -> int:
    response = await client.post("/games", json={})
    assert response.status_code == 201
    payload = response.json()
    assert payload["turn"] == 0
    return payload["id"]


@pytest.mark.asyncio
async def test_game_lifecycle(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        health = await client.get("/health")
        assert health.json()["status"] == "ok"
        assert health.json()["storage_backend"] == "json"

        game_id = await _create_game(client)
        assert game_id == 1

        listing = await client.get("/games")
        assert listing.status_code == 200
        assert listing.json() == [
            {"id": 1, "turn": 0, "shields": 200, "owned_tiles": 1, "unit_count": 0}
        ]

        detail = (await client.get(f"/games/{game_id}")).json()
        assert detail["resources"]["wood"] == 150
        assert [tile["name"] for tile in detail["tiles"]][0] == "Capital City"
        assert detail["tiles"][0]["building"]["kind"] == "TOWN_CENTER"

        deleted = await client.delete(f"/games/{game_id}")
        assert deleted.status_code == 204
        assert (await client.get(f"/games/{game_id}")).status_code == 404


@pytest.mark.asyncio
async def test_commands_are_applied_and_persisted(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        game_id = await _create_game(client)

        trained = await client.post(
            f"/games/{game_id}/units", json={"tile_id": 1, "unit": "SOLDIER"}
        )
        assert trained.status_code == 200
        body = trained.json()
        assert body["accepted"] is True
        assert body["game"]["units"][0]["state"] == "TRAINING"
        assert body["game"]["units"][0]["turns_to_train"] == 2

        for _ in range(2):
            ended = await client.post(f"/games/{game_id}/turns/end")
            assert ended.json()["accepted"] is True

        attacked = await client.post(
            f"/games/{game_id}/units/unit-1/attack", json={"tile_id": 4}
        )
        assert attacked.json()["game"]["resources"]["valor"] == 10

        built = await client.post(
            f"/games/{game_id}/buildings", json={"tile_id": 4, "building": "FARM"}
        )
        assert built.json()["log"] == ["Built FARM on Whispering Plains."]

        moved = await client.post(f"/games/{game_id}/units/unit-1/move", json={"tile_id": 1})
        assert moved.json()["game"]["units"][0]["destination"] == 1

        won = await client.post(f"/games/{game_id}/external-result", json={"outcome": "WIN"})
        assert won.json()["game"]["resources"]["shields"] == 480

    stored = JsonGameRepository(tmp_path).load(dm.GameID(game_id))
    assert stored.turn == 2
    assert stored.ledger.shields == 480
    assert stored.tiles[dm.TileID(4)].building is not None


@pytest.mark.asyncio
async def test_rejected_command_reports_reason(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        game_id = await _create_game(client)
        response = await client.post(
            f"/games/{game_id}/buildings", json={"tile_id": 2, "building": "FARM"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["accepted"] is False
        assert body["log"] == ["Cannot build on unowned tile: North Forest."]
        assert body["game"]["notifications"] == body["log"]


@pytest.mark.asyncio
async def test_errors_map_to_http_status(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        missing = await client.post("/games/99/turns/end")
        assert missing.status_code == 404
        assert missing.json()["detail"] == "game 99 not found"

        game_id = await _create_game(client)
        invalid = await client.post(
            f"/games/{game_id}/units", json={"tile_id": 1, "unit": "DRAGON"}
        )
        assert invalid.status_code == 422


@pytest.mark.asyncio
async def test_missing_game_is_404_on_every_route(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        assert (await client.get("/games/7")).status_code == 404
        deleted = await client.delete("/games/7")
        assert deleted.status_code == 404
        assert deleted.json() == {"detail": "game 7 not found"}
        moved = await client.post("/games/7/units/unit-1/move", json={"tile_id": 1})
        assert moved.status_code == 404


@pytest.mark.asyncio
async def test_listing_survives_a_corrupt_snapshot(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        await _create_game(client)
        (tmp_path / "game_2.json").write_text("{not json")

        listing = await client.get("/games")

        assert listing.status_code == 200
        assert [game["id"] for game in listing.json()] == [1]
