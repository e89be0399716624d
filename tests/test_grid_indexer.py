"""Tests for GridIndexer — quantization, canonical cells, neighborhoods."""

from __future__ import annotations

import pytest

from geocoin.core.errors import ConfigError
from geocoin.core.grid import GridIndexer
from geocoin.core.models import Cell, LatLng


class TestQuantization:
    """Floor-based mapping from coordinates to cells."""

    def test_origin_cell(self, grid: GridIndexer) -> None:
        cell = grid.cell_containing(LatLng(0.00005, 0.00005))
        assert (cell.row, cell.col) == (0, 0)

    def test_negative_coordinates_floor_down(self, grid: GridIndexer) -> None:
        cell = grid.cell_containing(LatLng(-0.00005, -0.00015))
        assert (cell.row, cell.col) == (-1, -2)

    def test_explicit_tile_size(self, grid: GridIndexer) -> None:
        cell = grid.cell_containing(LatLng(0.5, 1.5), tile_size=1.0)
        assert (cell.row, cell.col) == (0, 1)

    def test_bounds_of(self) -> None:
        g = GridIndexer(0.5)
        b = g.bounds_of(Cell(2, -1))
        assert b.south_west == LatLng(1.0, -0.5)
        assert b.north_east == LatLng(1.5, 0.0)

    def test_bounds_contain_quantized_point(self) -> None:
        g = GridIndexer(0.25)
        point = LatLng(3.3, -7.9)
        cell = g.cell_containing(point)
        assert g.bounds_of(cell).contains(point)

    def test_center_quantizes_back(self, grid: GridIndexer) -> None:
        cell = grid.canonical(123, -456)
        assert grid.cell_containing(grid.center_of(cell)) is cell


class TestCanonicalization:
    """One Cell instance per (row, col) within a grid."""

    def test_same_tile_same_instance(self, grid: GridIndexer) -> None:
        a = grid.cell_containing(LatLng(0.00001, 0.00001))
        b = grid.cell_containing(LatLng(0.00009, 0.00009))
        assert a is b

    def test_value_equal_cell_canonicalizes_to_same(self, grid: GridIndexer) -> None:
        canon = grid.canonical(4, 5)
        outsider = Cell(4, 5)
        assert outsider == canon
        assert grid.canonicalize(outsider) is canon

    def test_known_does_not_create(self, grid: GridIndexer) -> None:
        assert grid.known(9, 9) is None
        assert len(grid) == 0
        cell = grid.canonical(9, 9)
        assert grid.known(9, 9) is cell
        assert cell in grid
        assert len(grid) == 1

    def test_set_only_grows(self, grid: GridIndexer) -> None:
        grid.cell_containing(LatLng(0.0, 0.0))
        grid.cell_containing(LatLng(0.0, 0.0))
        grid.cell_containing(LatLng(1.0, 1.0))
        assert len(grid) == 2

    def test_separate_grids_do_not_share(self) -> None:
        a = GridIndexer(1.0).canonical(0, 0)
        b = GridIndexer(1.0).canonical(0, 0)
        assert a == b
        assert a is not b


class TestNeighborhood:
    """Square (2r)x(2r) neighborhood enumeration."""

    def test_count_and_uniqueness(self) -> None:
        g = GridIndexer(1e-4)
        cells = g.cells_within_radius(LatLng(36.9995, -122.0533), radius=3)
        assert len(cells) == 36
        assert len({(c.row, c.col) for c in cells}) == 36

    def test_all_within_radius(self) -> None:
        g = GridIndexer(1e-4)
        point = LatLng(0.00005, 0.00005)
        origin = g.cell_containing(point)
        for c in g.cells_within_radius(point, radius=3):
            assert abs(c.row - origin.row) <= 3
            assert abs(c.col - origin.col) <= 3

    def test_cells_are_canonical(self, grid: GridIndexer) -> None:
        cells = grid.cells_within_radius(LatLng(0.0, 0.0))
        for c in cells:
            assert grid.canonical(c.row, c.col) is c

    def test_includes_origin(self, grid: GridIndexer) -> None:
        point = LatLng(0.0123, 0.0456)
        origin = grid.cell_containing(point)
        assert origin in grid.cells_within_radius(point, radius=1)

    def test_zero_radius_is_empty(self, grid: GridIndexer) -> None:
        assert grid.cells_within_radius(LatLng(0.0, 0.0), radius=0) == []

    def test_default_radius_from_constructor(self) -> None:
        g = GridIndexer(1e-4, radius=2)
        assert len(g.cells_within_radius(LatLng(0.0, 0.0))) == 16


class TestInvalidConfiguration:
    """Degenerate geometry is refused up front."""

    @pytest.mark.parametrize("tile", [0.0, -1e-4])
    def test_non_positive_tile_size(self, tile: float) -> None:
        with pytest.raises(ConfigError):
            GridIndexer(tile)

    def test_negative_radius(self) -> None:
        with pytest.raises(ConfigError):
            GridIndexer(1e-4, radius=-1)

    def test_negative_radius_per_call(self, grid: GridIndexer) -> None:
        with pytest.raises(ConfigError):
            grid.cells_within_radius(LatLng(0.0, 0.0), radius=-2)

    def test_bad_tile_size_per_call(self, grid: GridIndexer) -> None:
        with pytest.raises(ConfigError):
            grid.cell_containing(LatLng(0.0, 0.0), tile_size=0.0)
