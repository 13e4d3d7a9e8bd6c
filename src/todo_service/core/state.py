"""Application state management."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from todo_service.services.key_issuer import KeyIssuer
    from todo_service.services.session_store import SessionStore


@dataclass
class Task:
    """A single task owned by one API key."""

    id: str
    name: str
    done: bool
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the public JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "done": self.done,
            "createdAt": self.created_at,
        }


@dataclass
class DelaySettings:
    """Artificial per-route latency in milliseconds."""

    list_tasks_ms: int = 0
    create_task_ms: int = 0
    update_task_ms: int = 0
    delete_task_ms: int = 0


@dataclass
class AppState:
    """Runtime application state."""

    start_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    session_store: SessionStore | None = None
    key_issuer: KeyIssuer | None = None
    delays: DelaySettings = field(default_factory=DelaySettings)

    @property
    def uptime_seconds(self) -> float:
        """Calculate uptime in seconds."""
        return (datetime.now(UTC) - self.start_time).total_seconds()

    @property
    def started_at(self) -> str:
        """ISO format start time."""
        return self.start_time.isoformat(timespec="seconds").replace("+00:00", "Z")


# Module-level mutable container to avoid `global` statement
_state_holder: dict[str, AppState] = {}


def get_app_state() -> AppState:
    """Get the current application state."""
    state = _state_holder.get("current")
    if state is None:
        raise RuntimeError("Application state not initialized")
    return state


def init_app_state() -> AppState:
    """Initialize application state. Called during startup."""
    state = AppState()
    _state_holder["current"] = state
    return state


def reset_app_state() -> None:
    """Reset application state. Used in testing."""
    _state_holder.pop("current", None)
