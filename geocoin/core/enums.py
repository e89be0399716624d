"""Enumerations used throughout the game."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Direction(IntEnum):
    """Cardinal movement directions."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @classmethod
    def parse(cls, text: str) -> Direction:
        """Accept ``"north"``, ``"N"`` or ``"n"`` style names."""
        key = text.strip().upper()
        for d in cls:
            if d.name == key or d.name[0] == key:
                return d
        raise ValueError(f"Unknown direction: {text!r}")


@unique
class EventCategory(IntEnum):
    """Categories for the player-facing status feed."""

    MOVE = 0
    COLLECT = 1
    DEPOSIT = 2
    MISS = 3
    RESTORE = 4
    SYSTEM = 5
