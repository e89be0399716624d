"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geocoin.api.dependencies import set_session_manager
from geocoin.api.routes import api_router
from geocoin.api.session_manager import SessionManager
from geocoin.config import GameConfig
from geocoin.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GameConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = SessionManager(_config)
        restored = manager.load()
        set_session_manager(manager)
        logger.info("API server started (%s save).", "restored" if restored else "new")
        yield
        manager.flush()
        set_session_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="GeoCoin",
        description=(
            "Location-based coin collecting — world model API.\n\n"
            "## API Groups\n\n"
            "- **Player** — Position, movement, held coins\n"
            "- **Caches** — Caches around the player; collect and deposit coins\n"
            "- **State** — Export, import and reset the saved game; status feed\n"
            "- **Config** — Read-only world generation parameters\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Player", "description": "Player marker position and the coins it holds."},
            {"name": "Caches", "description": "Caches in the player's neighborhood. Reading a cache for the first time generates and stores it."},
            {"name": "State", "description": "Whole-game export/import in the same format as the save file, reset, and the event feed."},
            {"name": "Config", "description": "Tile size, neighborhood radius, spawn probability and seed tags."},
        ],
    )

    # CORS: any origin, for local frontends
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
