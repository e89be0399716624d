"""Grid indexer — quantizes coordinates into canonical cells."""

from __future__ import annotations

import math
from typing import Iterator

from geocoin.core.errors import ConfigError
from geocoin.core.models import Bounds, Cell, LatLng


class GridIndexer:
    """Infinite square grid over the coordinate plane.

    Owns the canonical cell set: for every ``(row, col)`` seen during a
    session exactly one ``Cell`` instance exists, so cells can be compared
    by identity and used as mapping keys.  The set only grows.
    """

    __slots__ = ("tile_size", "radius", "_cells")

    def __init__(self, tile_size: float, radius: int = 8) -> None:
        _check_tile_size(tile_size)
        _check_radius(radius)
        self.tile_size = tile_size
        self.radius = radius
        self._cells: dict[tuple[int, int], Cell] = {}

    # -- canonical set --

    def canonical(self, row: int, col: int) -> Cell:
        """Return the canonical cell for ``(row, col)``, creating it if needed."""
        key = (row, col)
        cell = self._cells.get(key)
        if cell is None:
            cell = Cell(row, col)
            self._cells[key] = cell
        return cell

    def canonicalize(self, cell: Cell) -> Cell:
        return self.canonical(cell.row, cell.col)

    def known(self, row: int, col: int) -> Cell | None:
        """Return the canonical cell if it has been seen, without creating it."""
        return self._cells.get((row, col))

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, cell: object) -> bool:
        return isinstance(cell, Cell) and (cell.row, cell.col) in self._cells

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells.values())

    # -- quantization --

    def cell_containing(self, point: LatLng, tile_size: float | None = None) -> Cell:
        t = self._tile(tile_size)
        return self.canonical(math.floor(point.lat / t), math.floor(point.lng / t))

    def bounds_of(self, cell: Cell, tile_size: float | None = None) -> Bounds:
        t = self._tile(tile_size)
        return Bounds(
            south_west=LatLng(cell.row * t, cell.col * t),
            north_east=LatLng((cell.row + 1) * t, (cell.col + 1) * t),
        )

    def center_of(self, cell: Cell, tile_size: float | None = None) -> LatLng:
        return self.bounds_of(cell, tile_size).center

    # -- neighborhood --

    def cells_within_radius(
        self,
        point: LatLng,
        tile_size: float | None = None,
        radius: int | None = None,
    ) -> list[Cell]:
        """Return the square neighborhood around the cell containing *point*.

        Offsets run from ``-radius`` up to ``radius - 1`` on each axis, so
        the result holds exactly ``(2 * radius) ** 2`` distinct cells in
        row-major order.
        """
        r = self.radius if radius is None else radius
        _check_radius(r)
        origin = self.cell_containing(point, tile_size)
        return [
            self.canonical(origin.row + dr, origin.col + dc)
            for dr in range(-r, r)
            for dc in range(-r, r)
        ]

    def _tile(self, tile_size: float | None) -> float:
        if tile_size is None:
            return self.tile_size
        _check_tile_size(tile_size)
        return tile_size


def _check_tile_size(tile_size: float) -> None:
    if not tile_size > 0:
        raise ConfigError("tile_size", f"must be positive, got {tile_size}")


def _check_radius(radius: int) -> None:
    if radius < 0:
        raise ConfigError("radius", f"must be >= 0, got {radius}")
