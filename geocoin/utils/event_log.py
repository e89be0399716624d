"""Thread-safe event log for the player-facing status feed."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass

from geocoin.core.enums import EventCategory


@dataclass(frozen=True, slots=True)
class GameEvent:
    """A single status message, e.g. ``"Got coin: 0:0#3"``."""

    seq: int
    category: EventCategory
    message: str
    token_ids: tuple[str, ...] = ()  # identities of coins involved


class EventLog:
    """Append-only event log. Writers append; readers snapshot a slice.

    Sequence numbers are assigned on append and keep increasing across
    ``clear()`` so clients polling with ``since()`` never see a repeat.
    """

    __slots__ = ("_buffer", "_lock", "_next_seq")

    def __init__(self, maxlen: int | None = 1000) -> None:
        self._buffer: deque[GameEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()
        self._next_seq = 1

    def record(
        self,
        category: EventCategory,
        message: str,
        token_ids: tuple[str, ...] = (),
    ) -> GameEvent:
        with self._lock:
            event = GameEvent(self._next_seq, category, message, token_ids)
            self._next_seq += 1
            self._buffer.append(event)
        return event

    def since(self, seq: int) -> list[GameEvent]:
        """Return all events with sequence number > *seq*."""
        with self._lock:
            return [e for e in self._buffer if e.seq > seq]

    def latest(self, count: int = 50) -> list[GameEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:] if count > 0 else []

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()
