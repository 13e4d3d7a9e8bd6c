"""ASGI middleware for request validation."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, cast

from fastapi.responses import JSONResponse

from todo_service.core.exceptions import UNAUTHORIZED_MESSAGE
from todo_service.core.state import get_app_state
from todo_service.services.errors import UnauthorizedError

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send


_JSON_VALIDATION_ENDPOINTS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("POST", re.compile(r"^/(?P<api_key>[^/]+)/tasks/?$")),
    ("PATCH", re.compile(r"^/(?P<api_key>[^/]+)/tasks/[^/]+/?$")),
)


def _is_known_key(api_key: str) -> bool:
    store = get_app_state().session_store
    if store is None:
        msg = "SessionStore not initialized"
        raise RuntimeError(msg)
    try:
        store.resolve(api_key)
    except UnauthorizedError:
        return False
    return True


class RequestValidationMiddleware:
    """
    ASGI middleware that validates the API key, Content-Type and body size.

    Runs before FastAPI routes. The key check comes first and returns 401
    for unknown keys; then 415 for wrong content-type on task writes, and
    413 for oversized request bodies.
    """

    def __init__(self, app: ASGIApp, max_body_size: int) -> None:
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = cast("str", scope.get("method", "GET"))
        path = cast("str", scope.get("path", ""))

        match: re.Match[str] | None = None
        for candidate_method, pattern in _JSON_VALIDATION_ENDPOINTS:
            if candidate_method == method:
                match = pattern.match(path)
                if match is not None:
                    break
        if match is None:
            await self.app(scope, receive, send)
            return

        if not _is_known_key(match.group("api_key")):
            response = JSONResponse(
                status_code=401,
                content={"errorMessage": UNAUTHORIZED_MESSAGE},
            )
            await response(scope, receive, send)
            return

        raw_headers = cast("list[tuple[bytes, bytes]]", scope.get("headers", []))
        headers: dict[bytes, bytes] = dict(raw_headers)
        content_type = headers.get(b"content-type", b"").decode().lower()

        if not content_type.startswith("application/json"):
            response = JSONResponse(
                status_code=415,
                content={"errorMessage": "Content-Type must be application/json"},
            )
            await response(scope, receive, send)
            return

        # Read and buffer body, checking size
        body_parts: list[bytes] = []
        body_size = 0

        while True:
            message = cast("dict[str, Any]", await receive())
            chunk = cast("bytes", message.get("body", b""))
            body_parts.append(chunk)
            body_size += len(chunk)

            if body_size > self.max_body_size:
                response = JSONResponse(
                    status_code=413,
                    content={"errorMessage": "Request body exceeds maximum allowed size"},
                )
                await response(scope, receive, send)
                return

            if not message.get("more_body", False):
                break

        # Replay buffered body for downstream app
        full_body = b"".join(body_parts)
        body_sent = False

        async def buffered_receive() -> dict[str, Any]:
            nonlocal body_sent
            if not body_sent:
                body_sent = True
                return {"type": "http.request", "body": full_body, "more_body": False}
            return {"type": "http.disconnect"}

        await self.app(scope, buffered_receive, send)
