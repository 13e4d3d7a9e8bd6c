"""Unit tests for structured logging."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import pytest

from todo_service.logging import (
    SERVICE_LOGGER_NAME,
    DailyRotatingFileHandler,
    JSONFormatter,
    get_logger,
    setup_logging,
)

if TYPE_CHECKING:
    from pathlib import Path


def _record(message: str, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("todo_service.test", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestJSONFormatter:
    """JSON log line layout."""

    def test_basic_fields(self) -> None:
        payload = json.loads(JSONFormatter("todo").format(_record("hello")))
        assert payload["message"] == "hello"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "todo_service.test"
        assert payload["service"] == "todo"
        assert "extra" not in payload

    def test_extra_fields_are_nested(self) -> None:
        payload = json.loads(JSONFormatter().format(_record("issued", api_key="k-1")))
        assert payload["extra"] == {"api_key": "k-1"}
        assert "service" not in payload


@pytest.mark.unit
class TestSetupLogging:
    """setup_logging handler wiring."""

    def test_invalid_level_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            setup_logging("LOUD", "todo")

    def test_stdout_only_without_directory(self) -> None:
        logger = setup_logging("debug", "todo")
        assert logger.name == SERVICE_LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_file_handler_with_directory(self, tmp_path: Path) -> None:
        logger = setup_logging("INFO", "todo", str(tmp_path / "logs"))
        try:
            assert any(isinstance(h, DailyRotatingFileHandler) for h in logger.handlers)
            assert (tmp_path / "logs").is_dir()
        finally:
            setup_logging("INFO", "todo")


@pytest.mark.unit
def test_get_logger_namespaces() -> None:
    """Package modules keep their name; other names nest under the service."""
    assert get_logger("todo_service.routers.tasks").name == "todo_service.routers.tasks"
    assert get_logger("scratch").name == "todo_service.scratch"
