"""Custom exception handlers for consistent error responses."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from todo_service.logging import get_logger
from todo_service.services.errors import (
    TaskConflictError,
    TaskNotFoundError,
    TaskValidationError,
    UnauthorizedError,
)

if TYPE_CHECKING:
    from fastapi import FastAPI, Request
    from starlette.types import ExceptionHandler

__all__ = ["UNAUTHORIZED_MESSAGE", "ServiceError", "register_exception_handlers"]

UNAUTHORIZED_MESSAGE = "You have to provide a valid API key in the url. Go to /API_KEY to get one"
INVALID_ATTRIBUTES_MESSAGE = "provided attributes aren't valid"


class ServiceError(Exception):
    """Transport-level error rendered as ``{"errorMessage": ...}``."""

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error = error
        self.message = message
        self.status_code = status_code
        self.details = details if details is not None else {}


def _error_body(message: str, **extra: Any) -> dict[str, Any]:
    return {"errorMessage": message, **extra}


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Handle ServiceError exceptions."""
    logger = get_logger(__name__)
    logger.warning(
        "Service error",
        extra={
            "error_code": exc.error,
            "status_code": exc.status_code,
            "path": str(request.url.path),
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, **exc.details),
    )


async def unauthorized_handler(request: Request, _exc: UnauthorizedError) -> JSONResponse:
    """Unknown, missing or evicted API key."""
    logger = get_logger(__name__)
    logger.warning("Unauthorized", extra={"path": str(request.url.path)})
    return JSONResponse(status_code=401, content=_error_body(UNAUTHORIZED_MESSAGE))


async def task_validation_handler(request: Request, exc: TaskValidationError) -> JSONResponse:
    """Invalid task fields, all violations listed."""
    logger = get_logger(__name__)
    logger.warning(
        "Task validation failed",
        extra={"fields": sorted(exc.errors), "path": str(request.url.path)},
    )
    return JSONResponse(
        status_code=400,
        content=_error_body(INVALID_ATTRIBUTES_MESSAGE, validationErrors=exc.errors),
    )


async def task_conflict_handler(request: Request, exc: TaskConflictError) -> JSONResponse:
    """Duplicate normalized task name."""
    logger = get_logger(__name__)
    logger.warning("Task name conflict", extra={"path": str(request.url.path)})
    return JSONResponse(status_code=400, content=_error_body(str(exc)))


async def task_not_found_handler(_request: Request, _exc: TaskNotFoundError) -> Response:
    """Unknown task id. Empty body."""
    return Response(status_code=404)


async def unhandled_exception_handler(request: Request, _exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger = get_logger(__name__)
    logger.exception("Unhandled exception", extra={"path": str(request.url.path)})
    return JSONResponse(
        status_code=500,
        content=_error_body("An unexpected error occurred"),
    )


async def http_exception_handler(
    _request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Handle Starlette HTTP exceptions (e.g., 405 from router)."""
    if exc.status_code == 405:
        return JSONResponse(status_code=405, content=_error_body("Method not allowed"))
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the app."""
    handlers: tuple[tuple[type[Exception], Any], ...] = (
        (ServiceError, service_error_handler),
        (UnauthorizedError, unauthorized_handler),
        (TaskValidationError, task_validation_handler),
        (TaskConflictError, task_conflict_handler),
        (TaskNotFoundError, task_not_found_handler),
        (StarletteHTTPException, http_exception_handler),
        (Exception, unhandled_exception_handler),
    )
    for exc_class, handler in handlers:
        app.add_exception_handler(exc_class, cast("ExceptionHandler", handler))
