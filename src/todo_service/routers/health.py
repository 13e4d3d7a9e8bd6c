"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from todo_service.core.state import get_app_state
from todo_service.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health and return statistics."""
    state = get_app_state()
    total_sessions = 0
    total_tasks = 0
    if state.session_store is not None:
        total_sessions = state.session_store.count_sessions()
        total_tasks = state.session_store.count_tasks()
    return HealthResponse(
        status="ok",
        uptime_seconds=state.uptime_seconds,
        started_at=state.started_at,
        total_sessions=total_sessions,
        total_tasks=total_tasks,
    )
