"""Domain-separated deterministic RNG using xxhash.

Every draw is a pure function of the world seed, a cell's coordinates and a
domain tag, so re-deriving a cell from scratch always yields the same result
no matter in which order cells are visited.

Formula: RNG_Value = Hash(WorldSeed, Row, Col, DomainTag)
"""

from __future__ import annotations

import xxhash


class DeterministicRNG:
    """Stateless pseudo-random number generator keyed by cell coordinates.

    Holds no mutable state: two instances built from the same seed string
    return identical values for identical keys.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: str) -> None:
        self._seed = seed

    @property
    def seed(self) -> str:
        return self._seed

    def _hash(self, row: int, col: int, tag: str) -> int:
        payload = f"{self._seed}|{row},{col},{tag}".encode("utf-8")
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, row: int, col: int, tag: str) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(row, col, tag) / (self._MAX_UINT64 + 1)

    def next_int(self, row: int, col: int, tag: str, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(row, col, tag)
        return low + int(f * (high - low + 1))

    def next_bool(self, row: int, col: int, tag: str, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float(row, col, tag) < probability
