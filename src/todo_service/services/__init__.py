"""Business logic — no FastAPI imports."""

from todo_service.services.errors import (
    TaskConflictError,
    TaskNotFoundError,
    TaskServiceError,
    TaskValidationError,
    UnauthorizedError,
)
from todo_service.services.key_issuer import KeyIssuer
from todo_service.services.session_store import SessionStore

__all__ = [
    "KeyIssuer",
    "SessionStore",
    "TaskConflictError",
    "TaskNotFoundError",
    "TaskServiceError",
    "TaskValidationError",
    "UnauthorizedError",
]
