"""
Pydantic request/response models for the API.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response model for GET /health."""

    model_config = ConfigDict(extra="forbid")
    status: Literal["ok"]
    uptime_seconds: float
    started_at: str
    total_sessions: int
    total_tasks: int


class TaskResponse(BaseModel):
    """Public shape of a task."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    id: str
    name: str
    done: bool
    created_at: str = Field(alias="createdAt")


class ErrorResponse(BaseModel):
    """Standard error response model."""

    model_config = ConfigDict(extra="forbid")
    errorMessage: str  # noqa: N815
    validationErrors: dict[str, str] | None = None  # noqa: N815
