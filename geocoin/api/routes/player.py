"""GET/POST /api/v1/player — position and movement."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from geocoin.api.dependencies import get_session_manager
from geocoin.api.routes.caches import serialize_cell
from geocoin.api.schemas import LatLngSchema, PlayerResponse
from geocoin.api.session_manager import SessionManager
from geocoin.core.enums import Direction
from geocoin.core.models import LatLng

router = APIRouter()


def _player_response(manager: SessionManager) -> PlayerResponse:
    position, cell, holding = manager.player_status()
    return PlayerResponse(
        position=LatLngSchema(lat=position.lat, lng=position.lng),
        cell=serialize_cell(cell),
        holding=holding,
        points=len(holding),
    )


@router.get("/player", response_model=PlayerResponse)
def get_player(
    manager: SessionManager = Depends(get_session_manager),
) -> PlayerResponse:
    return _player_response(manager)


@router.post("/player/move/{direction}", response_model=PlayerResponse)
def move_player(
    direction: str,
    manager: SessionManager = Depends(get_session_manager),
) -> PlayerResponse:
    try:
        d = Direction.parse(direction)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    manager.move(d)
    return _player_response(manager)


@router.post("/player/teleport", response_model=PlayerResponse)
def teleport_player(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lng: float = Query(..., ge=-180.0, le=180.0),
    manager: SessionManager = Depends(get_session_manager),
) -> PlayerResponse:
    manager.teleport(LatLng(lat, lng))
    return _player_response(manager)
