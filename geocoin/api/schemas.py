"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Geometry ---

class LatLngSchema(BaseModel):
    lat: float
    lng: float


class BoundsSchema(BaseModel):
    south_west: LatLngSchema
    north_east: LatLngSchema


class CellSchema(BaseModel):
    row: int
    col: int
    key: str


# --- Player ---

class PlayerResponse(BaseModel):
    position: LatLngSchema
    cell: CellSchema
    holding: list[str] = Field(default_factory=list)
    points: int = 0


# --- Caches ---

class CacheSchema(BaseModel):
    cell: CellSchema
    bounds: BoundsSchema
    tokens: list[str] = Field(default_factory=list)
    value: int = 0  # token count, as shown in the popup


class NearbyCachesResponse(BaseModel):
    origin: CellSchema
    radius: int
    caches: list[CacheSchema] = Field(default_factory=list)


class TransferResponse(BaseModel):
    status: str             # "ok" | "miss"
    message: str
    token: str | None = None
    cache: CacheSchema | None = None
    points: int = 0


# --- State ---

class GameStateSchema(BaseModel):
    """Exported game state; accepted verbatim by the import endpoint."""

    version: int
    seed: str | None = None
    caches: list[tuple[str, str]] = Field(default_factory=list)
    holding: list[str] = Field(default_factory=list)
    position: tuple[float, float] | None = None


class ControlResponse(BaseModel):
    status: str
    message: str


class EventSchema(BaseModel):
    seq: int
    category: str
    message: str
    token_ids: list[str] = Field(default_factory=list)


class EventsResponse(BaseModel):
    events: list[EventSchema] = Field(default_factory=list)


# --- Config ---

class GameConfigResponse(BaseModel):
    world_seed: str
    tile_degrees: float
    neighborhood_radius: int
    spawn_probability: float
    max_initial_tokens: int
    spawn_tag: str
    value_tag: str
