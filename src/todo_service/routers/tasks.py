"""Task endpoints scoped to an API key."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, TypeVar

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from todo_service.core.state import get_app_state
from todo_service.routers.validation import extract_task_fields, parse_json_body
from todo_service.schemas import ErrorResponse, TaskResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from todo_service.services.session_store import SessionStore

T = TypeVar("T")

router = APIRouter()

_UNAUTHORIZED: dict[int | str, dict[str, Any]] = {401: {"model": ErrorResponse}}


def _get_store() -> SessionStore:
    state = get_app_state()
    if state.session_store is None:
        msg = "SessionStore not initialized"
        raise RuntimeError(msg)
    return state.session_store


async def _run_in_session(
    store: SessionStore,
    api_key: str,
    delay_ms: int,
    operation: Callable[[], T],
) -> T:
    """Run a store operation after the configured delay, one at a time per key."""
    async with store.session_lock(api_key):
        if delay_ms > 0:
            await asyncio.sleep(delay_ms / 1000)
        return operation()


@router.post(
    "/{api_key}/tasks",
    status_code=201,
    response_model=TaskResponse,
    responses={400: {"model": ErrorResponse}, **_UNAUTHORIZED},
)
async def create_task(api_key: str, request: Request) -> JSONResponse:
    """Create a task in the caller's list."""
    store = _get_store()
    store.resolve(api_key)
    fields = extract_task_fields(parse_json_body(await request.body()))

    delay_ms = get_app_state().delays.create_task_ms
    task = await _run_in_session(
        store, api_key, delay_ms, lambda: store.create_task(api_key, fields)
    )
    return JSONResponse(status_code=201, content=task.to_dict())


@router.get(
    "/{api_key}/tasks",
    response_model=list[TaskResponse],
    responses=_UNAUTHORIZED,
)
async def list_tasks(api_key: str) -> JSONResponse:
    """List every task of the caller in insertion order."""
    store = _get_store()
    delay_ms = get_app_state().delays.list_tasks_ms
    tasks = await _run_in_session(store, api_key, delay_ms, lambda: store.list_tasks(api_key))
    return JSONResponse(status_code=200, content=[task.to_dict() for task in tasks])


@router.patch(
    "/{api_key}/tasks/{task_id}",
    response_model=TaskResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"description": "Task not found"},
        **_UNAUTHORIZED,
    },
)
async def update_task(api_key: str, task_id: str, request: Request) -> JSONResponse:
    """Merge the provided fields into an existing task."""
    store = _get_store()
    store.resolve(api_key)
    fields = extract_task_fields(parse_json_body(await request.body()))

    delay_ms = get_app_state().delays.update_task_ms
    task = await _run_in_session(
        store, api_key, delay_ms, lambda: store.update_task(api_key, task_id, fields)
    )
    return JSONResponse(status_code=200, content=task.to_dict())


@router.delete(
    "/{api_key}/tasks/{task_id}",
    status_code=204,
    responses={404: {"description": "Task not found"}, **_UNAUTHORIZED},
)
async def delete_task(api_key: str, task_id: str) -> Response:
    """Remove a task from the caller's list."""
    store = _get_store()
    delay_ms = get_app_state().delays.delete_task_ms
    await _run_in_session(store, api_key, delay_ms, lambda: store.delete_task(api_key, task_id))
    return Response(status_code=204)
