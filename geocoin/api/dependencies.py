"""FastAPI dependency injection — provides the SessionManager singleton."""

from __future__ import annotations

from geocoin.api.session_manager import SessionManager

_session_manager: SessionManager | None = None


def set_session_manager(manager: SessionManager | None) -> None:
    global _session_manager
    _session_manager = manager


def get_session_manager() -> SessionManager:
    if _session_manager is None:
        raise RuntimeError("SessionManager not initialized — server not started correctly.")
    return _session_manager
