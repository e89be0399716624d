"""Cache generator — seeded spawn test and fresh cache contents."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from geocoin.core.cache import Cache
from geocoin.core.models import Cell, Token

if TYPE_CHECKING:
    from geocoin.config import GameConfig
    from geocoin.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


class CacheGenerator:
    """Decides whether a cell holds a cache and mints its initial tokens.

    Both decisions are pure functions of the cell coordinates and the
    configured seed, so they can be re-derived at any time.
    """

    __slots__ = ("_config", "_rng")

    def __init__(self, config: GameConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng

    def exists_at(self, cell: Cell) -> bool:
        return self._rng.next_bool(
            cell.row, cell.col, self._config.spawn_tag, self._config.spawn_probability,
        )

    def token_count_for(self, cell: Cell) -> int:
        """Number of tokens a fresh cache at *cell* starts with.

        Only consulted at first generation; once a snapshot exists the
        stored token list wins.
        """
        upper = self._config.max_initial_tokens
        if upper <= 0:
            return 0
        return self._rng.next_int(cell.row, cell.col, self._config.value_tag, 0, upper - 1)

    def generate(self, cell: Cell) -> Cache:
        count = self.token_count_for(cell)
        cache = Cache(cell, [Token(cell, serial) for serial in range(count)])
        logger.debug("Generated cache at %s with %d tokens", cell, count)
        return cache
