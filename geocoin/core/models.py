"""Core value types: LatLng, Bounds, Cell, Token."""

from __future__ import annotations

from dataclasses import dataclass

from geocoin.core.enums import Direction


@dataclass(frozen=True, slots=True)
class LatLng:
    """Immutable geographic point in degrees."""

    lat: float = 0.0
    lng: float = 0.0

    def offset(self, d_lat: float, d_lng: float) -> LatLng:
        return LatLng(self.lat + d_lat, self.lng + d_lng)

    def __repr__(self) -> str:
        return f"({self.lat:.6f}, {self.lng:.6f})"


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned coordinate rectangle: ``south_west`` to ``north_east``."""

    south_west: LatLng
    north_east: LatLng

    def contains(self, point: LatLng) -> bool:
        """Half-open test matching the floor quantization of the grid."""
        return (
            self.south_west.lat <= point.lat < self.north_east.lat
            and self.south_west.lng <= point.lng < self.north_east.lng
        )

    @property
    def center(self) -> LatLng:
        return LatLng(
            (self.south_west.lat + self.north_east.lat) / 2,
            (self.south_west.lng + self.north_east.lng) / 2,
        )


@dataclass(frozen=True, slots=True)
class Cell:
    """Immutable grid coordinate.

    Equality is by value, but the ``GridIndexer`` hands out a single
    canonical instance per ``(row, col)`` so identity checks also hold
    within a session.
    """

    row: int
    col: int

    @property
    def key(self) -> str:
        """Store key; the same derivation is used by the grid and the store."""
        return f"{self.row},{self.col}"

    @staticmethod
    def parse_key(key: str) -> tuple[int, int]:
        """Inverse of :attr:`key`.  Raises ValueError on malformed input."""
        row, col = key.split(",")
        return int(row), int(col)

    def __repr__(self) -> str:
        return f"Cell({self.row}, {self.col})"


@dataclass(frozen=True, slots=True)
class Token:
    """A collectible coin, identified by the cell it was minted in and a serial."""

    origin: Cell
    serial: int

    @property
    def identity(self) -> str:
        return f"{self.origin.row}:{self.origin.col}#{self.serial}"

    @staticmethod
    def parse_identity(identity: str) -> tuple[int, int, int]:
        """Split ``"row:col#serial"`` into its parts.  Raises ValueError."""
        coords, serial = identity.split("#")
        row, col = coords.split(":")
        return int(row), int(col), int(serial)

    def __repr__(self) -> str:
        return f"Token({self.identity})"


# Direction offsets in (d_row, d_col); row grows northward with latitude.
DIRECTION_OFFSETS: dict[int, tuple[int, int]] = {
    Direction.NORTH: (1, 0),
    Direction.EAST: (0, 1),
    Direction.SOUTH: (-1, 0),
    Direction.WEST: (0, -1),
}
