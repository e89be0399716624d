"""GameSession — owns every piece of mutable world state for one player.

Nothing here is global: the canonical cell set lives in the session's
``GridIndexer`` and the snapshots in its ``WorldStore``.  All calls are
synchronous and expected to arrive one at a time.
"""

from __future__ import annotations

import logging
from typing import Any

from geocoin.config import GameConfig
from geocoin.core.cache import Cache
from geocoin.core.enums import Direction, EventCategory
from geocoin.core.errors import CorruptSnapshotError
from geocoin.core.grid import GridIndexer
from geocoin.core.models import Cell, LatLng, Token
from geocoin.core.player import Player
from geocoin.core.world_store import WorldStore
from geocoin.systems.generator import CacheGenerator
from geocoin.systems.rng import DeterministicRNG
from geocoin.utils.event_log import EventLog

logger = logging.getLogger(__name__)

STATE_VERSION = 1


class GameSession:
    """A single game: grid, generator, store, player and status feed."""

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config if config is not None else GameConfig()
        self.events = EventLog()
        self.regenerated = 0
        self._build()

    def _build(self) -> None:
        cfg = self.config
        self.rng = DeterministicRNG(cfg.world_seed)
        self.grid = GridIndexer(cfg.tile_degrees, cfg.neighborhood_radius)
        self.generator = CacheGenerator(cfg, self.rng)
        self.store = WorldStore(self.grid, self.generator)
        self.player = Player(LatLng(cfg.start_lat, cfg.start_lng))

    # -- queries --

    @property
    def player_cell(self) -> Cell:
        return self.grid.cell_containing(self.player.position)

    def nearby_cells(self) -> list[Cell]:
        return self.grid.cells_within_radius(self.player.position)

    def in_reach(self, cell: Cell) -> bool:
        """True if *cell* lies in the player's current neighborhood."""
        origin = self.player_cell
        r = self.grid.radius
        return -r <= cell.row - origin.row < r and -r <= cell.col - origin.col < r

    def nearby_caches(self) -> list[Cache]:
        """Return every cache in the player's neighborhood.

        Caches seen for the first time are generated and stored as a side
        effect.
        """
        return [
            self._load(cell)
            for cell in self.nearby_cells()
            if self.generator.exists_at(cell)
        ]

    def cache_at(self, row: int, col: int) -> Cache | None:
        """Return the cache at ``(row, col)`` or ``None`` if none spawns there."""
        cell = self.grid.canonical(row, col)
        if not self.generator.exists_at(cell):
            return None
        return self._load(cell)

    def _load(self, cell: Cell) -> Cache:
        try:
            return self.store.load_or_create(cell)
        except CorruptSnapshotError as exc:
            logger.warning("Discarding corrupt snapshot at %s: %s", cell, exc)
            self.events.record(EventCategory.RESTORE, f"Cache at {cell.key} was unreadable and has been reset.")
            self.regenerated += 1
            return self.store.regenerate(cell)

    # -- movement --

    def move_player(self, direction: Direction) -> LatLng:
        pos = self.player.move(direction, self.grid)
        self.events.record(EventCategory.MOVE, f"Moved {direction.name.lower()} to {self.player_cell.key}")
        return pos

    def teleport_player(self, point: LatLng) -> LatLng:
        pos = self.player.teleport(point)
        self.events.record(EventCategory.MOVE, f"Relocated to {self.player_cell.key}")
        return pos

    # -- coin transfer --

    def collect(self, row: int, col: int, identity: str | None = None) -> Token | None:
        """Move a coin from the cache at ``(row, col)`` into the holding.

        Returns ``None`` (and records a miss) if there is no cache in reach
        or no matching coin.  On success the cache snapshot is committed.
        """
        cache = self._reachable_cache(row, col)
        if cache is None:
            return None
        token = self.player.collect(cache, identity)
        if token is None:
            self.events.record(EventCategory.MISS, f"No coin to collect at {cache.cell.key}")
            return None
        self.store.commit(cache)
        self.events.record(EventCategory.COLLECT, f"Got coin: {token.identity}", (token.identity,))
        return token

    def deposit(self, row: int, col: int, identity: str | None = None) -> Token | None:
        """Move a held coin into the cache at ``(row, col)``."""
        cache = self._reachable_cache(row, col)
        if cache is None:
            return None
        token = self.player.deposit(cache, identity)
        if token is None:
            self.events.record(EventCategory.MISS, "No coin to deposit")
            return None
        self.store.commit(cache)
        self.events.record(EventCategory.DEPOSIT, f"Dropped off coin: {token.identity}", (token.identity,))
        return token

    def _reachable_cache(self, row: int, col: int) -> Cache | None:
        cell = self.grid.canonical(row, col)
        if not self.in_reach(cell):
            self.events.record(EventCategory.MISS, f"Cache at {cell.key} is out of reach")
            return None
        cache = self.cache_at(row, col)
        if cache is None:
            self.events.record(EventCategory.MISS, f"No cache at {cell.key}")
        return cache

    # -- persistence --

    def export_state(self) -> dict[str, Any]:
        """Total game state as a JSON-ready dict."""
        return {
            "version": STATE_VERSION,
            "seed": self.config.world_seed,
            "caches": [[key, snap] for key, snap in self.store.export()],
            "holding": self.player.holding_identities(),
            "position": [self.player.position.lat, self.player.position.lng],
        }

    def restore_state(self, state: dict[str, Any]) -> None:
        """Replace the session's store, holding and position with *state*.

        A corrupt cache snapshot is tolerated and regenerated on access,
        unless it is the origin of a held coin.

        Raises:
            CorruptSnapshotError: If the envelope is malformed or a coin
                would exist in more than one place.
        """
        if not isinstance(state, dict):
            raise CorruptSnapshotError("Saved state must be a JSON object", state)
        if state.get("version") != STATE_VERSION:
            raise CorruptSnapshotError(f"Unsupported state version: {state.get('version')!r}", state)
        if state.get("seed") not in (None, self.config.world_seed):
            logger.warning(
                "Save was made with seed %r, session uses %r; unvisited cells will differ",
                state.get("seed"), self.config.world_seed,
            )

        holding = [self._parse_token(i) for i in _list_field(state, "holding")]
        position = _position(state.get("position"), self.player.position)
        entries = _list_field(state, "caches")

        store = WorldStore(self.grid, self.generator)
        store.import_entries(entries)
        _check_single_owner(store, self.grid, holding)
        self.store = store
        self.player = Player(position, holding)
        logger.info("Restored %d caches and %d held coins", len(self.store), len(holding))

    def _parse_token(self, identity: object) -> Token:
        try:
            row, col, serial = Token.parse_identity(identity)  # type: ignore[arg-type]
        except (AttributeError, TypeError, ValueError) as exc:
            raise CorruptSnapshotError(f"Malformed coin identity: {identity!r}", identity) from exc
        return Token(self.grid.canonical(row, col), serial)

    def reset(self) -> None:
        """Start over with an empty store and a player at the start position."""
        self._build()
        self.events.record(EventCategory.SYSTEM, "Game reset.")
        logger.info("Session reset")


def _list_field(state: dict[str, Any], name: str) -> list[Any]:
    value = state.get(name, [])
    if not isinstance(value, list):
        raise CorruptSnapshotError(f"Saved state field '{name}' must be a list", state)
    return value


def _position(value: object, default: LatLng) -> LatLng:
    if value is None:
        return default
    if (
        not isinstance(value, list)
        or len(value) != 2
        or not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in value)
    ):
        raise CorruptSnapshotError(f"Saved position must be [lat, lng], got {value!r}", value)
    return LatLng(float(value[0]), float(value[1]))


def _check_single_owner(store: WorldStore, grid: GridIndexer, holding: list[Token]) -> None:
    """Refuse state in which a coin would exist in more than one place.

    A held coin's origin cache must be stored and readable, otherwise
    regenerating that cache would hand the coin out again.
    """
    seen: set[str] = set()
    for token in holding:
        if token.identity in seen:
            raise CorruptSnapshotError(f"Coin {token.identity} is held twice", token.identity)
        if token.origin not in store:
            raise CorruptSnapshotError(
                f"Held coin {token.identity} has no saved cache at {token.origin.key}", token.identity,
            )
        seen.add(token.identity)

    held_origins = {token.origin for token in holding}
    for key in list(store):
        cell = grid.canonical(*Cell.parse_key(key))
        try:
            cache = store.load(cell)
        except CorruptSnapshotError:
            if cell in held_origins:
                raise
            continue  # regenerated on first access
        for identity in cache.identities():
            if identity in seen:
                raise CorruptSnapshotError(f"Coin {identity} is stored in more than one place", identity)
            seen.add(identity)
