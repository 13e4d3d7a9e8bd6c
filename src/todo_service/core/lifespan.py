"""Application lifecycle management."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from todo_service.config import get_settings
from todo_service.core.state import DelaySettings, init_app_state
from todo_service.logging import get_logger, setup_logging
from todo_service.services.key_issuer import KeyIssuer
from todo_service.services.session_store import SessionStore

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle."""
    # === STARTUP ===
    settings = get_settings()

    setup_logging(settings.logging.level, settings.service.name, settings.logging.directory)
    logger = get_logger(__name__)

    state = init_app_state()

    store = SessionStore(
        max_api_keys=settings.limits.max_api_keys,
        max_tasks_per_session=settings.limits.max_tasks_per_session,
    )
    state.session_store = store
    state.key_issuer = KeyIssuer(store)
    state.delays = DelaySettings(
        list_tasks_ms=settings.delays.list_tasks_ms,
        create_task_ms=settings.delays.create_task_ms,
        update_task_ms=settings.delays.update_task_ms,
        delete_task_ms=settings.delays.delete_task_ms,
    )

    logger.info(
        "Service starting",
        extra={
            "service": settings.service.name,
            "version": settings.service.version,
            "port": settings.server.port,
            "max_api_keys": settings.limits.max_api_keys,
            "max_tasks_per_session": settings.limits.max_tasks_per_session,
        },
    )

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info(
        "Service shutting down",
        extra={
            "uptime_seconds": state.uptime_seconds,
            "total_sessions": store.count_sessions(),
        },
    )
