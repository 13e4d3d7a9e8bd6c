"""
Task field validation.

Pure Python — no FastAPI imports.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

MIN_NAME_LENGTH = 1
MAX_NAME_LENGTH = 30
TASK_FIELDS: tuple[str, ...] = ("name", "done")


class Presence(StrEnum):
    """Whether the ``name`` field must be supplied."""

    REQUIRED = "required"
    OPTIONAL = "optional"


@dataclass
class FieldErrors:
    """Validation failure result, one message per offending field."""

    errors: dict[str, str]


def normalize_name(value: str) -> str:
    """Trim surrounding whitespace and lower-case a task name."""
    return value.strip().lower()


def _validate_name(value: object) -> str | None:
    if not isinstance(value, str):
        return '"name" must be a string'
    normalized = normalize_name(value)
    if len(normalized) < MIN_NAME_LENGTH:
        return '"name" is not allowed to be empty'
    if len(normalized) > MAX_NAME_LENGTH:
        return f'"name" length must be less than or equal to {MAX_NAME_LENGTH} characters long'
    return None


def validate_task_fields(
    fields: Mapping[str, object],
    presence: Presence,
) -> dict[str, object] | FieldErrors:
    """
    Validate and normalize candidate task fields.

    Every violation is collected before returning. Keys other than
    ``name`` and ``done`` are ignored.

    Args:
        fields: Raw fields taken from the request body.
        presence: ``REQUIRED`` for creation, ``OPTIONAL`` for updates.

    Returns:
        The normalized fields, or a FieldErrors describing every failure.
        On creation a missing ``done`` normalizes to False; on update only
        the fields that were provided are returned.
    """
    errors: dict[str, str] = {}
    normalized: dict[str, object] = {}

    if "name" in fields:
        name_error = _validate_name(fields["name"])
        if name_error is not None:
            errors["name"] = name_error
        else:
            normalized["name"] = normalize_name(str(fields["name"]))
    elif presence is Presence.REQUIRED:
        errors["name"] = '"name" is required'

    if "done" in fields:
        done = fields["done"]
        if isinstance(done, bool):
            normalized["done"] = done
        else:
            errors["done"] = '"done" must be a boolean'
    elif presence is Presence.REQUIRED:
        normalized["done"] = False

    if errors:
        return FieldErrors(errors=errors)
    return normalized
