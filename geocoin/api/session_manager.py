"""SessionManager — process-wide owner of the GameSession behind the API.

FastAPI runs sync endpoints on a thread pool, so every call into the
session goes through one lock; the session itself is never touched
concurrently.  After each mutation the exported state is written to the
save file so a crash loses at most the change in flight.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from geocoin.core.enums import Direction, EventCategory
from geocoin.core.errors import CorruptSnapshotError
from geocoin.core.session import GameSession
from geocoin.utils.persistence import SaveFile

if TYPE_CHECKING:
    from geocoin.config import GameConfig
    from geocoin.core.cache import Cache
    from geocoin.core.grid import GridIndexer
    from geocoin.core.models import Cell, LatLng, Token
    from geocoin.utils.event_log import EventLog

logger = logging.getLogger(__name__)


class SessionManager:
    """Serializes access to a GameSession and persists it after every change."""

    def __init__(self, config: GameConfig, save_file: SaveFile | None = None) -> None:
        self.config = config
        self._lock = threading.Lock()
        self._save = save_file if save_file is not None else SaveFile(config.save_file, config.save_key)
        self._session = GameSession(config)

    # -- lifecycle --

    def load(self) -> bool:
        """Restore the session from the save file.  Returns True if restored.

        An unreadable save is discarded and the session starts fresh.
        """
        with self._lock:
            try:
                state = self._save.load()
                if state is None:
                    return False
                self._session.restore_state(state)
            except CorruptSnapshotError as exc:
                logger.warning("Ignoring unreadable save %s: %s", self._save.path, exc)
                self._session.events.record(EventCategory.SYSTEM, "Saved game was unreadable; starting fresh.")
                return False
            self._session.events.record(EventCategory.SYSTEM, "Saved game restored.")
            return True

    def flush(self) -> None:
        with self._lock:
            self._persist()

    def _persist(self) -> None:
        self._save.save(self._session.export_state())

    # -- read access --

    @property
    def events(self) -> EventLog:
        return self._session.events

    @property
    def grid(self) -> GridIndexer:
        return self._session.grid

    def player_status(self) -> tuple[LatLng, Cell, list[str]]:
        """Position, containing cell and held coin identities."""
        with self._lock:
            player = self._session.player
            return player.position, self._session.player_cell, player.holding_identities()

    def nearby_caches(self) -> list[Cache]:
        # Generation and corrupt-snapshot repair write to the store, so this persists too.
        with self._lock:
            before = self._store_mark()
            caches = self._session.nearby_caches()
            if self._store_mark() != before:
                self._persist()
            return caches

    def cache_at(self, row: int, col: int) -> Cache | None:
        with self._lock:
            before = self._store_mark()
            cache = self._session.cache_at(row, col)
            if self._store_mark() != before:
                self._persist()
            return cache

    def _store_mark(self) -> tuple[int, int]:
        return len(self._session.store), self._session.regenerated

    def export_state(self) -> dict[str, Any]:
        with self._lock:
            return self._session.export_state()

    # -- mutations --

    def move(self, direction: Direction) -> LatLng:
        with self._lock:
            pos = self._session.move_player(direction)
            self._persist()
            return pos

    def teleport(self, point: LatLng) -> LatLng:
        with self._lock:
            pos = self._session.teleport_player(point)
            self._persist()
            return pos

    def collect(self, row: int, col: int, identity: str | None = None) -> Token | None:
        with self._lock:
            token = self._session.collect(row, col, identity)
            if token is not None:
                self._persist()
            return token

    def deposit(self, row: int, col: int, identity: str | None = None) -> Token | None:
        with self._lock:
            token = self._session.deposit(row, col, identity)
            if token is not None:
                self._persist()
            return token

    def import_state(self, state: dict[str, Any]) -> None:
        """Replace the session state.  Raises CorruptSnapshotError on bad input."""
        with self._lock:
            self._session.restore_state(state)
            self._persist()
            self._session.events.record(EventCategory.SYSTEM, "Game state imported.")

    def reset(self) -> None:
        with self._lock:
            self._session.reset()
            self._persist()
