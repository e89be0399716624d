"""GET /api/v1/config — expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_session_manager
from geocoin.api.schemas import GameConfigResponse
from geocoin.api.session_manager import SessionManager

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(
    manager: SessionManager = Depends(get_session_manager),
) -> GameConfigResponse:
    cfg = manager.config
    return GameConfigResponse(
        world_seed=cfg.world_seed,
        tile_degrees=cfg.tile_degrees,
        neighborhood_radius=cfg.neighborhood_radius,
        spawn_probability=cfg.spawn_probability,
        max_initial_tokens=cfg.max_initial_tokens,
        spawn_tag=cfg.spawn_tag,
        value_tag=cfg.value_tag,
    )
