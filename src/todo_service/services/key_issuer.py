"""API key issuance."""

from __future__ import annotations

from typing import TYPE_CHECKING

from todo_service.logging import get_logger

if TYPE_CHECKING:
    from todo_service.services.session_store import SessionStore


class KeyIssuer:
    """Mints API keys by delegating to the session store."""

    def __init__(self, store: SessionStore) -> None:
        self._store = store
        self._logger = get_logger(__name__)

    def issue(self) -> str:
        """Issue a new API key with a freshly seeded task list."""
        api_key = self._store.issue_key()
        self._logger.info(
            "API key issued",
            extra={"api_key": api_key, "total_sessions": self._store.count_sessions()},
        )
        return api_key
