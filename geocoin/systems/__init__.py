"""World systems: deterministic RNG and cache generation."""

from geocoin.systems.rng import DeterministicRNG
from geocoin.systems.generator import CacheGenerator

__all__ = ["CacheGenerator", "DeterministicRNG"]
