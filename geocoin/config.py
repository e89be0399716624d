"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass, replace

from geocoin.core.errors import ConfigError


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for a game session.

    Every field that feeds the world generator must stay stable across a
    deployment: changing them changes what fresh caches contain, although
    restored snapshots remain valid.
    """

    # World generation
    world_seed: str = "geocoin"
    tile_degrees: float = 1e-4
    neighborhood_radius: int = 8         # in tiles, square neighborhood
    spawn_probability: float = 0.1
    max_initial_tokens: int = 5          # exclusive upper bound per fresh cache

    # RNG domain tags
    spawn_tag: str = "spawn"
    value_tag: str = "initialValue"

    # Player
    start_lat: float = 36.9995
    start_lng: float = -122.0533

    # Persistence
    save_file: str = "geocoin_save.json"
    save_key: str = "geocoin"

    # Logging
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.tile_degrees > 0:
            raise ConfigError("tile_degrees", f"must be positive, got {self.tile_degrees}")
        if self.neighborhood_radius < 0:
            raise ConfigError("neighborhood_radius", f"must be >= 0, got {self.neighborhood_radius}")
        if not 0.0 <= self.spawn_probability <= 1.0:
            raise ConfigError("spawn_probability", f"must be in [0, 1], got {self.spawn_probability}")
        if self.max_initial_tokens < 0:
            raise ConfigError("max_initial_tokens", f"must be >= 0, got {self.max_initial_tokens}")
        if not self.spawn_tag or not self.value_tag:
            raise ConfigError("spawn_tag/value_tag", "domain tags must be non-empty")
        if self.spawn_tag == self.value_tag:
            raise ConfigError("spawn_tag/value_tag", "domain tags must differ")

    def with_overrides(self, **changes: object) -> GameConfig:
        """Return a validated copy with *changes* applied."""
        return replace(self, **changes)
