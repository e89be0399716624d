"""Shared fixtures for the geocoin test suite."""

from __future__ import annotations

import pytest

from geocoin.config import GameConfig
from geocoin.core.grid import GridIndexer
from geocoin.core.session import GameSession
from geocoin.core.world_store import WorldStore
from geocoin.systems.generator import CacheGenerator
from geocoin.systems.rng import DeterministicRNG


@pytest.fixture
def config() -> GameConfig:
    """Small-radius config with the documented scenario parameters."""
    return GameConfig(
        world_seed="test-seed",
        tile_degrees=1e-4,
        neighborhood_radius=3,
        spawn_probability=0.05,
        max_initial_tokens=5,
        start_lat=0.00005,
        start_lng=0.00005,
    )


@pytest.fixture
def grid(config: GameConfig) -> GridIndexer:
    return GridIndexer(config.tile_degrees, config.neighborhood_radius)


@pytest.fixture
def generator(config: GameConfig) -> CacheGenerator:
    return CacheGenerator(config, DeterministicRNG(config.world_seed))


@pytest.fixture
def store(grid: GridIndexer, generator: CacheGenerator) -> WorldStore:
    return WorldStore(grid, generator)


@pytest.fixture
def session(config: GameConfig) -> GameSession:
    return GameSession(config)
