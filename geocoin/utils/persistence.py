"""Durable save file — a tiny JSON key-value store on disk.

The file holds one object keyed by a fixed name, mirroring the browser
local-storage slot the game state was designed around::

    {"geocoin": {"version": 1, "caches": [...], "holding": [...], ...}}
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from geocoin.core.errors import CorruptSnapshotError

logger = logging.getLogger(__name__)


class SaveFile:
    """Reads and writes the exported game state under a fixed key."""

    __slots__ = ("_path", "_key")

    def __init__(self, path: str | Path, key: str = "geocoin") -> None:
        self._path = Path(path)
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> dict[str, Any] | None:
        """Return the saved state, or ``None`` if nothing has been saved yet.

        Raises:
            CorruptSnapshotError: If the file exists but cannot be parsed.
        """
        data = self._read_all()
        state = data.get(self._key)
        if state is None:
            return None
        if not isinstance(state, dict):
            raise CorruptSnapshotError(f"Save slot '{self._key}' in {self._path} is not an object", state)
        logger.info("Loaded save from %s", self._path)
        return state

    def save(self, state: dict[str, Any]) -> None:
        """Write *state* atomically, preserving other keys in the file."""
        try:
            data = self._read_all()
        except CorruptSnapshotError:
            logger.warning("Overwriting unreadable save file %s", self._path)
            data = {}
        data[self._key] = state

        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(tmp, self._path)
        logger.debug("Saved state to %s", self._path)

    def clear(self) -> None:
        """Remove this game's slot; delete the file if nothing else remains."""
        if not self.exists():
            return
        try:
            data = self._read_all()
        except CorruptSnapshotError:
            data = {}
        data.pop(self._key, None)
        if data:
            self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        else:
            self._path.unlink()
        logger.info("Cleared save slot '%s' in %s", self._key, self._path)

    def _read_all(self) -> dict[str, Any]:
        if not self.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise CorruptSnapshotError(f"Cannot read save file {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise CorruptSnapshotError(f"Save file {self._path} does not hold a JSON object", data)
        return data
