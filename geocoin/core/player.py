"""Player — position marker and held coins."""

from __future__ import annotations

from typing import TYPE_CHECKING

from geocoin.core.enums import Direction
from geocoin.core.models import DIRECTION_OFFSETS, LatLng, Token

if TYPE_CHECKING:
    from geocoin.core.cache import Cache
    from geocoin.core.grid import GridIndexer


class Player:
    """The player's position and holding collection.

    Coins move between a cache and the holding by identity: the token is
    removed from one container and the same value inserted into the other,
    so a coin is always in exactly one place.
    """

    __slots__ = ("position", "_holding")

    def __init__(self, position: LatLng, holding: list[Token] | None = None) -> None:
        self.position = position
        self._holding: list[Token] = list(holding) if holding else []

    @property
    def holding(self) -> tuple[Token, ...]:
        return tuple(self._holding)

    @property
    def points(self) -> int:
        return len(self._holding)

    def holding_identities(self) -> list[str]:
        return [t.identity for t in self._holding]

    # -- movement --

    def move(self, direction: Direction, grid: GridIndexer) -> LatLng:
        """Step one tile and land on the center of the neighbouring cell."""
        d_row, d_col = DIRECTION_OFFSETS[direction]
        here = grid.cell_containing(self.position)
        self.position = grid.center_of(grid.canonical(here.row + d_row, here.col + d_col))
        return self.position

    def teleport(self, point: LatLng) -> LatLng:
        self.position = point
        return self.position

    # -- coin transfer --

    def collect(self, cache: Cache, identity: str | None = None) -> Token | None:
        """Take a coin out of *cache*.

        With no *identity*, the cache's most recent coin is taken.  Returns
        ``None`` if the cache is empty or holds no such coin.
        """
        token = cache.pop_token() if identity is None else cache.remove_token(identity)
        if token is not None:
            self._holding.append(token)
        return token

    def deposit(self, cache: Cache, identity: str | None = None) -> Token | None:
        """Put a held coin into *cache*.

        With no *identity*, the most recently collected coin is deposited.
        Returns ``None`` if the holding is empty or holds no such coin.
        """
        token = self._take(identity)
        if token is not None:
            cache.add_token(token)
        return token

    def _take(self, identity: str | None) -> Token | None:
        if not self._holding:
            return None
        if identity is None:
            return self._holding.pop()
        for i, token in enumerate(self._holding):
            if token.identity == identity:
                return self._holding.pop(i)
        return None
