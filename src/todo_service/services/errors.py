"""
Domain errors raised by the task store.

Pure Python — no FastAPI imports. Translated to HTTP responses in
``todo_service.core.exceptions``.
"""

from __future__ import annotations


class TaskServiceError(Exception):
    """Base class for task store failures."""


class UnauthorizedError(TaskServiceError):
    """Raised when an API key was never issued or has been evicted."""

    def __init__(self, api_key: str | None) -> None:
        super().__init__("Unknown API key")
        self.api_key = api_key


class TaskValidationError(TaskServiceError):
    """Raised when task fields fail validation. Carries every field error."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("provided attributes aren't valid")
        self.errors = errors


class TaskNotFoundError(TaskServiceError):
    """Raised when a task id does not exist in the session."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class TaskConflictError(TaskServiceError):
    """Raised when a normalized task name already exists in the session."""

    def __init__(self, name: str) -> None:
        super().__init__(f'A task named "{name}" already exists on the server')
        self.name = name
