"""API routers."""

from todo_service.routers import health, keys, tasks

__all__ = ["health", "keys", "tasks"]
