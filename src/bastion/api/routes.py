"""HTTP routes for the Bastion API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, Field

from bastion import __version__
from bastion.api.runtime import ApiState
from bastion.domain import commands
from bastion.domain import models as dm
from bastion.domain.enums import BuildingKind, MatchOutcome, UnitKind

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


class GameSummary(BaseModel):
    id: int
    turn: int
    shields: int
    owned_tiles: int
    unit_count: int


class GameDetail(BaseModel):
    id: int
    turn: int
    resources: dict[str, int]
    tiles: list[dict[str, object]]
    units: list[dict[str, object]]
    notifications: list[str]


class CommandResponse(BaseModel):
    accepted: bool
    log: list[str]
    game: GameDetail


class CreateGameRequest(BaseModel):
    seed: int | None = None


class MatchResultRequest(BaseModel):
    outcome: MatchOutcome


class ConstructRequest(BaseModel):
    tile_id: int = Field(ge=0)
    building: BuildingKind


class TrainRequest(BaseModel):
    tile_id: int = Field(ge=0)
    unit: UnitKind


class TargetTileRequest(BaseModel):
    tile_id: int = Field(ge=0)


async def _execute(state: ApiState, game_id: int, command: commands.Command) -> CommandResponse:
    result = await state.games.execute(dm.GameID(game_id), command)
    return CommandResponse(
        accepted=result.accepted,
        log=result.log,
        game=GameDetail.model_validate(state.games.to_detail_dict(result.state)),
    )


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "version": __version__,
        "storage_backend": state.settings.storage_backend,
    }


@router.get("/games", response_model=list[GameSummary])
async def list_games(state: ApiStateDep) -> list[GameSummary]:
    games = state.games.list_games()
    return [GameSummary.model_validate(state.games.to_summary_dict(g)) for g in games]


@router.post("/games", response_model=GameDetail, status_code=status.HTTP_201_CREATED)
async def create_game(request: CreateGameRequest, state: ApiStateDep) -> GameDetail:
    game = state.games.create_game(seed=request.seed)
    return GameDetail.model_validate(state.games.to_detail_dict(game))


@router.get("/games/{game_id}", response_model=GameDetail)
async def get_game(game_id: int, state: ApiStateDep) -> GameDetail:
    game = state.games.get_game(dm.GameID(game_id))
    return GameDetail.model_validate(state.games.to_detail_dict(game))


@router.delete("/games/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_game(game_id: int, state: ApiStateDep) -> Response:
    await state.games.delete_game(dm.GameID(game_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/games/{game_id}/external-result", response_model=CommandResponse)
async def report_match_result(
    game_id: int, request: MatchResultRequest, state: ApiStateDep
) -> CommandResponse:
    return await _execute(state, game_id, commands.ReportMatchResult(request.outcome))


@router.post("/games/{game_id}/turns/end", response_model=CommandResponse)
async def end_turn(game_id: int, state: ApiStateDep) -> CommandResponse:
    return await _execute(state, game_id, commands.EndTurn())


@router.post("/games/{game_id}/buildings", response_model=CommandResponse)
async def construct_building(
    game_id: int, request: ConstructRequest, state: ApiStateDep
) -> CommandResponse:
    command = commands.ConstructBuilding(dm.TileID(request.tile_id), request.building)
    return await _execute(state, game_id, command)


@router.post("/games/{game_id}/units", response_model=CommandResponse)
async def train_unit(game_id: int, request: TrainRequest, state: ApiStateDep) -> CommandResponse:
    command = commands.TrainUnit(dm.TileID(request.tile_id), request.unit)
    return await _execute(state, game_id, command)


@router.post("/games/{game_id}/units/{unit_id}/attack", response_model=CommandResponse)
async def attack_tile(
    game_id: int, unit_id: str, request: TargetTileRequest, state: ApiStateDep
) -> CommandResponse:
    command = commands.AttackTile(dm.UnitID(unit_id), dm.TileID(request.tile_id))
    return await _execute(state, game_id, command)


@router.post("/games/{game_id}/units/{unit_id}/move", response_model=CommandResponse)
async def move_unit(
    game_id: int, unit_id: str, request: TargetTileRequest, state: ApiStateDep
) -> CommandResponse:
    command = commands.MoveUnit(dm.UnitID(unit_id), dm.TileID(request.tile_id))
    return await _execute(state, game_id, command)
