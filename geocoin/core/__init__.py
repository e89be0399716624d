"""Core world model: cells, coins, caches and the stores that own them."""

from geocoin.core.enums import Direction, EventCategory
from geocoin.core.errors import ConfigError, CorruptSnapshotError, GeoCoinError
from geocoin.core.models import Bounds, Cell, LatLng, Token
from geocoin.core.grid import GridIndexer
from geocoin.core.cache import Cache
from geocoin.core.world_store import WorldStore
from geocoin.core.player import Player

__all__ = [
    "Bounds",
    "Cache",
    "Cell",
    "ConfigError",
    "CorruptSnapshotError",
    "Direction",
    "EventCategory",
    "GeoCoinError",
    "GridIndexer",
    "LatLng",
    "Player",
    "Token",
    "WorldStore",
]
