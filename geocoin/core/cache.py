"""Cache — the mutable token collection bound to one grid cell.

A cache is serialized to an opaque JSON memento::

    {"v": 1, "cell": [row, col], "tokens": [[row, col, serial], ...]}

Restoring a memento never re-runs generation, and every cell reference in it
is routed back through the ``GridIndexer`` so the restored cache shares the
session's canonical cells.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Iterator

from geocoin.core.errors import CorruptSnapshotError
from geocoin.core.models import Cell, Token

if TYPE_CHECKING:
    from geocoin.core.grid import GridIndexer

SNAPSHOT_VERSION = 1


class Cache:
    """Ordered collection of tokens present at a single cell."""

    __slots__ = ("cell", "_tokens")

    def __init__(self, cell: Cell, tokens: list[Token] | None = None) -> None:
        self.cell = cell
        self._tokens: list[Token] = list(tokens) if tokens else []

    # -- queries --

    @property
    def tokens(self) -> tuple[Token, ...]:
        return tuple(self._tokens)

    def identities(self) -> list[str]:
        return [t.identity for t in self._tokens]

    def find(self, identity: str) -> Token | None:
        for token in self._tokens:
            if token.identity == identity:
                return token
        return None

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(list(self._tokens))

    def __contains__(self, identity: object) -> bool:
        return isinstance(identity, str) and self.find(identity) is not None

    # -- mutation --

    def add_token(self, token: Token) -> None:
        self._tokens.append(token)

    def remove_token(self, identity: str) -> Token | None:
        """Remove and return the token with *identity*; ``None`` on a miss."""
        for i, token in enumerate(self._tokens):
            if token.identity == identity:
                return self._tokens.pop(i)
        return None

    def pop_token(self) -> Token | None:
        """Remove and return the most recently added token, if any."""
        if not self._tokens:
            return None
        return self._tokens.pop()

    # -- memento --

    def serialize(self) -> str:
        payload = {
            "v": SNAPSHOT_VERSION,
            "cell": [self.cell.row, self.cell.col],
            "tokens": [[t.origin.row, t.origin.col, t.serial] for t in self._tokens],
        }
        return json.dumps(payload, separators=(",", ":"))

    @classmethod
    def deserialize(cls, snapshot: str, grid: GridIndexer) -> Cache:
        """Rebuild a cache from :meth:`serialize` output.

        Raises:
            CorruptSnapshotError: If *snapshot* is malformed, has an unknown
                schema version, or repeats a token identity.
        """
        try:
            data = json.loads(snapshot)
        except (TypeError, ValueError) as exc:
            raise CorruptSnapshotError(f"Snapshot is not valid JSON: {exc}", snapshot) from exc

        if not isinstance(data, dict):
            raise CorruptSnapshotError("Snapshot must be a JSON object", snapshot)
        if data.get("v") != SNAPSHOT_VERSION:
            raise CorruptSnapshotError(f"Unsupported snapshot version: {data.get('v')!r}", snapshot)

        row, col = _int_pair(data.get("cell"), snapshot)
        cell = grid.canonical(row, col)

        raw_tokens = data.get("tokens")
        if not isinstance(raw_tokens, list):
            raise CorruptSnapshotError("Snapshot 'tokens' must be a list", snapshot)

        tokens: list[Token] = []
        seen: set[str] = set()
        for entry in raw_tokens:
            if not isinstance(entry, list) or len(entry) != 3 or not all(_is_int(v) for v in entry):
                raise CorruptSnapshotError(f"Malformed token entry: {entry!r}", snapshot)
            t_row, t_col, serial = entry
            token = Token(grid.canonical(t_row, t_col), serial)
            if token.identity in seen:
                raise CorruptSnapshotError(f"Duplicate token {token.identity}", snapshot)
            seen.add(token.identity)
            tokens.append(token)

        return cls(cell, tokens)

    def __repr__(self) -> str:
        return f"Cache({self.cell.row}, {self.cell.col}, tokens={len(self._tokens)})"


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _int_pair(value: object, snapshot: str) -> tuple[int, int]:
    if not isinstance(value, list) or len(value) != 2 or not all(_is_int(v) for v in value):
        raise CorruptSnapshotError(f"Snapshot 'cell' must be [row, col], got {value!r}", snapshot)
    return value[0], value[1]
