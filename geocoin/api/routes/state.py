"""/api/v1/state and /api/v1/events — export, import, reset, status feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from geocoin.api.dependencies import get_session_manager
from geocoin.api.schemas import ControlResponse, EventSchema, EventsResponse, GameStateSchema
from geocoin.api.session_manager import SessionManager
from geocoin.core.errors import CorruptSnapshotError

router = APIRouter()


@router.get("/state/export", response_model=GameStateSchema)
def export_state(
    manager: SessionManager = Depends(get_session_manager),
) -> GameStateSchema:
    return GameStateSchema.model_validate(manager.export_state())


@router.post("/state/import", response_model=ControlResponse)
def import_state(
    state: GameStateSchema,
    manager: SessionManager = Depends(get_session_manager),
) -> ControlResponse:
    try:
        manager.import_state(state.model_dump(mode="json"))
    except CorruptSnapshotError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ControlResponse(status="ok", message=f"Imported {len(state.caches)} caches.")


@router.post("/state/reset", response_model=ControlResponse)
def reset_state(
    manager: SessionManager = Depends(get_session_manager),
) -> ControlResponse:
    manager.reset()
    return ControlResponse(status="ok", message="Game reset.")


@router.get("/events", response_model=EventsResponse)
def get_events(
    since: int = Query(0, ge=0, description="Return events with a sequence number above this"),
    limit: int = Query(50, ge=1, le=500),
    manager: SessionManager = Depends(get_session_manager),
) -> EventsResponse:
    events = manager.events.since(since)[-limit:]
    return EventsResponse(
        events=[
            EventSchema(
                seq=e.seq,
                category=e.category.name.lower(),
                message=e.message,
                token_ids=list(e.token_ids),
            )
            for e in events
        ]
    )
