"""Exception hierarchy for the world model.

A plain miss (a token that is not in a cache, a cell with no cache) is never
an exception; those return ``None``.  The classes below cover the two real
failure kinds: bad configuration and unreadable persisted state.
"""

from __future__ import annotations


class GeoCoinError(Exception):
    """Base class for all geocoin-specific exceptions."""


class ConfigError(GeoCoinError, ValueError):
    """Raised when a configuration value would produce degenerate geometry."""

    def __init__(self, param_name: str, reason: str | None = None) -> None:
        if reason:
            message = f"Invalid configuration for '{param_name}': {reason}"
            self.param_name: str | None = param_name
        else:
            message = param_name
            self.param_name = None
        super().__init__(message)


class CorruptSnapshotError(GeoCoinError, ValueError):
    """Raised when a cache snapshot or save payload cannot be decoded.

    Callers usually treat this as "no prior state" and regenerate, but that
    decision belongs to them.
    """

    def __init__(self, message: str, snapshot: object = None) -> None:
        self.snapshot = snapshot
        super().__init__(message)
