"""FastAPI application wiring for Bastion."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bastion import __version__
from bastion.api import routes
from bastion.api.runtime import ApiState, build_state
from bastion.config import get_settings
from bastion.repository import GameNotFoundError

logger = logging.getLogger(__name__)


async def _game_not_found(request: Request, exc: Exception) -> JSONResponse:
    logger.debug("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


def create_app(*, state_factory: Callable[[], ApiState] = build_state) -> FastAPI:
    """Build the API: one ``ApiState`` per lifespan, games served from its repository."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        api_state = state_factory()
        app.state.api_state = api_state
        logger.info("serving games from %s storage", api_state.settings.storage_backend)
        try:
            yield
        finally:
            await api_state.shutdown()

    app = FastAPI(title="Bastion API", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(GameNotFoundError, _game_not_found)
    app.include_router(routes.router)
    return app


app = create_app()
