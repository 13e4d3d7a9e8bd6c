"""Unit test fixtures."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from tests.helpers import write_config
from todo_service.config import clear_settings_cache
from todo_service.core.state import reset_app_state
from todo_service.logging import SERVICE_LOGGER_NAME

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


def _reset_service_logger() -> None:
    """Drop handlers left behind by a previous lifespan."""
    logger = logging.getLogger(SERVICE_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def _isolate_test(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Point CONFIG_PATH at a per-test config and clear caches around each test."""
    monkeypatch.setenv("CONFIG_PATH", str(write_config(tmp_path)))
    clear_settings_cache()
    reset_app_state()
    _reset_service_logger()

    yield

    clear_settings_cache()
    reset_app_state()
    _reset_service_logger()
