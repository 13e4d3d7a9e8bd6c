"""In-memory, API-key scoped task storage with FIFO eviction."""

from __future__ import annotations

import asyncio
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from threading import RLock
from typing import TYPE_CHECKING

from todo_service.core.state import Task
from todo_service.logging import get_logger
from todo_service.services.errors import (
    TaskConflictError,
    TaskNotFoundError,
    TaskValidationError,
    UnauthorizedError,
)
from todo_service.services.task_validator import FieldErrors, Presence, validate_task_fields

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = get_logger(__name__)

# (name, done, age at issuance)
DEFAULT_TASKS: tuple[tuple[str, bool, timedelta], ...] = (
    ("be wild", True, timedelta(days=90)),
    ("begin this workshop", True, timedelta(seconds=1)),
    ("finish this workshop", False, timedelta(0)),
)


def _format_timestamp(moment: datetime) -> str:
    return moment.isoformat(timespec="seconds").replace("+00:00", "Z")


def _new_task_id() -> str:
    return f"t-{uuid.uuid4()}"


@dataclass
class Session:
    """Task list owned by a single API key."""

    api_key: str
    tasks: OrderedDict[str, Task] = field(default_factory=OrderedDict)
    # normalized name -> task id
    names: dict[str, str] = field(default_factory=dict)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def append(self, task: Task) -> None:
        self.tasks[task.id] = task
        self.names[task.name] = task.id

    def pop_oldest(self) -> Task:
        _, task = self.tasks.popitem(last=False)
        del self.names[task.name]
        return task


class SessionStore:
    """
    Registry of API keys and their bounded task lists.

    Keys and tasks are both kept in insertion order so the oldest entry
    can be evicted in O(1) when a bound is exceeded. Every public method
    runs under a re-entrant lock. Tasks handed to callers are copies.
    """

    def __init__(self, max_api_keys: int, max_tasks_per_session: int) -> None:
        if max_api_keys < 1:
            raise ValueError("max_api_keys must be >= 1")
        if max_tasks_per_session < 1:
            raise ValueError("max_tasks_per_session must be >= 1")
        self._lock = RLock()
        self._sessions: OrderedDict[str, Session] = OrderedDict()
        self._max_api_keys = max_api_keys
        self._max_tasks_per_session = max_tasks_per_session

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def issue_key(self) -> str:
        """Mint a new API key and seed its task list with the default tasks."""
        api_key = uuid.uuid4().hex
        now = datetime.now(UTC)
        session = Session(api_key=api_key)
        for name, done, age in DEFAULT_TASKS:
            session.append(
                Task(
                    id=_new_task_id(),
                    name=name,
                    done=done,
                    created_at=_format_timestamp(now - age),
                )
            )

        with self._lock:
            self._sessions[api_key] = session
            while len(self._sessions) > self._max_api_keys:
                evicted_key, _ = self._sessions.popitem(last=False)
                logger.info("API key evicted", extra={"api_key": evicted_key})

        return api_key

    def resolve(self, api_key: str | None) -> Session:
        """Return the live session for an API key."""
        with self._lock:
            session = self._sessions.get(api_key) if api_key else None
        if session is None:
            raise UnauthorizedError(api_key)
        return session

    def session_lock(self, api_key: str | None) -> asyncio.Lock:
        """Return the lock that serializes operations on one session."""
        return self.resolve(api_key).lock

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def create_task(self, api_key: str | None, fields: Mapping[str, object]) -> Task:
        """
        Validate and append a new task.

        Raises:
            UnauthorizedError: The key is unknown or evicted.
            TaskValidationError: One or more fields are invalid.
            TaskConflictError: The normalized name already exists.
        """
        with self._lock:
            session = self.resolve(api_key)
            result = validate_task_fields(fields, Presence.REQUIRED)
            if isinstance(result, FieldErrors):
                raise TaskValidationError(result.errors)

            name = str(result["name"])
            if name in session.names:
                raise TaskConflictError(name)

            task = Task(
                id=_new_task_id(),
                name=name,
                done=bool(result["done"]),
                created_at=_format_timestamp(datetime.now(UTC)),
            )
            session.append(task)
            while len(session.tasks) > self._max_tasks_per_session:
                evicted = session.pop_oldest()
                logger.debug(
                    "Task evicted",
                    extra={"api_key": session.api_key, "task_id": evicted.id},
                )
            return replace(task)

    def list_tasks(self, api_key: str | None) -> list[Task]:
        """Return every task of the session in insertion order."""
        with self._lock:
            session = self.resolve(api_key)
            return [replace(task) for task in session.tasks.values()]

    def update_task(
        self,
        api_key: str | None,
        task_id: str,
        fields: Mapping[str, object],
    ) -> Task:
        """
        Merge the provided fields into an existing task.

        Omitted fields are left untouched; ``id`` and ``created_at`` never
        change.

        Raises:
            UnauthorizedError: The key is unknown or evicted.
            TaskValidationError: One or more fields are invalid.
            TaskNotFoundError: No task with that id exists in the session.
            TaskConflictError: The new name belongs to another task.
        """
        with self._lock:
            session = self.resolve(api_key)
            result = validate_task_fields(fields, Presence.OPTIONAL)
            if isinstance(result, FieldErrors):
                raise TaskValidationError(result.errors)

            task = session.tasks.get(task_id)
            if task is None:
                raise TaskNotFoundError(task_id)

            if "name" in result:
                name = str(result["name"])
                owner = session.names.get(name)
                if owner is not None and owner != task.id:
                    raise TaskConflictError(name)
                del session.names[task.name]
                task.name = name
                session.names[name] = task.id
            if "done" in result:
                task.done = bool(result["done"])
            return replace(task)

    def delete_task(self, api_key: str | None, task_id: str) -> None:
        """
        Remove a task from the session.

        Raises:
            UnauthorizedError: The key is unknown or evicted.
            TaskNotFoundError: No task with that id exists in the session.
        """
        with self._lock:
            session = self.resolve(api_key)
            task = session.tasks.pop(task_id, None)
            if task is None:
                raise TaskNotFoundError(task_id)
            del session.names[task.name]

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def count_sessions(self) -> int:
        """Number of live API keys."""
        with self._lock:
            return len(self._sessions)

    def count_tasks(self) -> int:
        """Number of tasks across all live sessions."""
        with self._lock:
            return sum(len(session.tasks) for session in self._sessions.values())
