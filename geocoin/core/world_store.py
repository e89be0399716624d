"""World store — the authoritative cell-key → snapshot mapping."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator

from geocoin.core.cache import Cache
from geocoin.core.errors import CorruptSnapshotError
from geocoin.core.models import Cell

if TYPE_CHECKING:
    from geocoin.core.grid import GridIndexer
    from geocoin.systems.generator import CacheGenerator

logger = logging.getLogger(__name__)


class WorldStore:
    """Session-wide map from ``Cell.key`` to serialized cache state.

    Entries are only ever added or overwritten during a session, never
    removed.  The whole mapping (plus the player's holding) is the unit of
    persistence.
    """

    __slots__ = ("_grid", "_generator", "_snapshots")

    def __init__(self, grid: GridIndexer, generator: CacheGenerator) -> None:
        self._grid = grid
        self._generator = generator
        self._snapshots: dict[str, str] = {}

    # -- raw access --

    def get(self, cell: Cell) -> str | None:
        return self._snapshots.get(cell.key)

    def put(self, cell: Cell, snapshot: str) -> None:
        self._snapshots[cell.key] = snapshot

    def commit(self, cache: Cache) -> str:
        """Re-serialize *cache* into the store and return the snapshot."""
        snapshot = cache.serialize()
        self._snapshots[cache.cell.key] = snapshot
        return snapshot

    def __len__(self) -> int:
        return len(self._snapshots)

    def __contains__(self, cell: object) -> bool:
        return isinstance(cell, Cell) and cell.key in self._snapshots

    def __iter__(self) -> Iterator[str]:
        return iter(self._snapshots)

    # -- load / create --

    def load(self, cell: Cell) -> Cache | None:
        """Restore the cache at *cell* from its snapshot; ``None`` if never stored.

        Raises:
            CorruptSnapshotError: If the stored snapshot cannot be decoded or
                belongs to a different cell.
        """
        snapshot = self._snapshots.get(cell.key)
        if snapshot is None:
            return None
        cache = Cache.deserialize(snapshot, self._grid)
        if cache.cell is not self._grid.canonicalize(cell):
            raise CorruptSnapshotError(
                f"Snapshot stored under {cell.key} describes cell {cache.cell.key}", snapshot,
            )
        logger.debug("Restored cache at %s (%d tokens)", cell, len(cache))
        return cache

    def load_or_create(self, cell: Cell) -> Cache:
        """Return the cache at *cell*, generating and storing it on first sight.

        Reading can write: when no snapshot exists the freshly generated
        cache is serialized into the store before it is returned.

        Raises:
            CorruptSnapshotError: Propagated from :meth:`load`.
        """
        cell = self._grid.canonicalize(cell)
        cache = self.load(cell)
        if cache is None:
            cache = self._generator.generate(cell)
            self.commit(cache)
        return cache

    def regenerate(self, cell: Cell) -> Cache:
        """Discard whatever is stored for *cell* and generate fresh content."""
        cell = self._grid.canonicalize(cell)
        cache = self._generator.generate(cell)
        self.commit(cache)
        return cache

    # -- export / import --

    def export(self) -> list[tuple[str, str]]:
        """Return every ``(cell_key, snapshot)`` pair, sorted by key."""
        return sorted(self._snapshots.items())

    def import_entries(self, entries: Iterable[tuple[str, str]]) -> int:
        """Load ``(cell_key, snapshot)`` pairs verbatim and return how many.

        Keys are re-canonicalized through the grid so later lookups by cell
        succeed.  Snapshots are stored as-is and only decoded on access.

        Raises:
            CorruptSnapshotError: If a key is not a ``"row,col"`` pair or a
                snapshot is not a string.
        """
        count = 0
        for entry in entries:
            try:
                key, snapshot = entry
                row, col = Cell.parse_key(key)
            except (TypeError, ValueError, AttributeError) as exc:
                raise CorruptSnapshotError(f"Malformed store entry: {entry!r}", entry) from exc
            if not isinstance(snapshot, str):
                raise CorruptSnapshotError(f"Snapshot for {key} is not a string", entry)
            cell = self._grid.canonical(row, col)
            self._snapshots[cell.key] = snapshot
            count += 1
        return count

    def clear(self) -> None:
        self._snapshots.clear()
