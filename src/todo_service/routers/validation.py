"""Shared request validation helpers for todo routers."""

from __future__ import annotations

import json
from typing import Any

from todo_service.core.exceptions import ServiceError
from todo_service.services.task_validator import TASK_FIELDS


def parse_json_body(raw_body: bytes) -> dict[str, Any]:
    """Parse JSON body, raising ServiceError on failure."""
    try:
        data = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ServiceError(
            "INVALID_JSON",
            "Request body is not valid JSON",
            400,
        ) from exc

    if not isinstance(data, dict):
        raise ServiceError(
            "INVALID_JSON",
            "Request body must be a JSON object",
            400,
        )

    return data


def extract_task_fields(data: dict[str, Any]) -> dict[str, object]:
    """Keep only the task fields the client actually sent."""
    return {name: data[name] for name in TASK_FIELDS if name in data}
