"""GET/POST /api/v1/caches — nearby caches and coin transfer."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from geocoin.api.dependencies import get_session_manager
from geocoin.api.schemas import (
    BoundsSchema,
    CacheSchema,
    CellSchema,
    LatLngSchema,
    NearbyCachesResponse,
    TransferResponse,
)
from geocoin.api.session_manager import SessionManager
from geocoin.core.cache import Cache
from geocoin.core.grid import GridIndexer
from geocoin.core.models import Cell

router = APIRouter()


def serialize_cell(cell: Cell) -> CellSchema:
    return CellSchema(row=cell.row, col=cell.col, key=cell.key)


def serialize_cache(cache: Cache, grid: GridIndexer) -> CacheSchema:
    b = grid.bounds_of(cache.cell)
    return CacheSchema(
        cell=serialize_cell(cache.cell),
        bounds=BoundsSchema(
            south_west=LatLngSchema(lat=b.south_west.lat, lng=b.south_west.lng),
            north_east=LatLngSchema(lat=b.north_east.lat, lng=b.north_east.lng),
        ),
        tokens=cache.identities(),
        value=len(cache),
    )


@router.get("/caches", response_model=NearbyCachesResponse)
def get_nearby_caches(
    manager: SessionManager = Depends(get_session_manager),
) -> NearbyCachesResponse:
    caches = manager.nearby_caches()
    _, origin, _ = manager.player_status()
    return NearbyCachesResponse(
        origin=serialize_cell(origin),
        radius=manager.grid.radius,
        caches=[serialize_cache(c, manager.grid) for c in caches],
    )


@router.get("/caches/{row}/{col}", response_model=CacheSchema)
def get_cache(
    row: int,
    col: int,
    manager: SessionManager = Depends(get_session_manager),
) -> CacheSchema:
    cache = manager.cache_at(row, col)
    if cache is None:
        raise HTTPException(status_code=404, detail=f"No cache at {row},{col}")
    return serialize_cache(cache, manager.grid)


@router.post("/caches/{row}/{col}/collect", response_model=TransferResponse)
def collect(
    row: int,
    col: int,
    token: str | None = Query(None, description="Coin identity; omit to take the top coin"),
    manager: SessionManager = Depends(get_session_manager),
) -> TransferResponse:
    taken = manager.collect(row, col, token)
    return _transfer_response(manager, row, col, taken.identity if taken else None, "Got coin")


@router.post("/caches/{row}/{col}/deposit", response_model=TransferResponse)
def deposit(
    row: int,
    col: int,
    token: str | None = Query(None, description="Coin identity; omit to drop the last collected coin"),
    manager: SessionManager = Depends(get_session_manager),
) -> TransferResponse:
    dropped = manager.deposit(row, col, token)
    return _transfer_response(manager, row, col, dropped.identity if dropped else None, "Dropped off coin")


def _transfer_response(
    manager: SessionManager,
    row: int,
    col: int,
    identity: str | None,
    verb: str,
) -> TransferResponse:
    cache = manager.cache_at(row, col)
    _, _, holding = manager.player_status()
    if identity is None:
        latest = manager.events.latest(1)
        message = latest[0].message if latest else "Nothing happened."
        return TransferResponse(
            status="miss",
            message=message,
            cache=serialize_cache(cache, manager.grid) if cache else None,
            points=len(holding),
        )
    return TransferResponse(
        status="ok",
        message=f"{verb}: {identity}",
        token=identity,
        cache=serialize_cache(cache, manager.grid) if cache else None,
        points=len(holding),
    )
