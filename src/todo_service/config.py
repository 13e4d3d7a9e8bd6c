"""
Configuration management for the todo service.

Loads configuration from YAML with ZERO defaults.
Every value must be explicitly specified or startup fails.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

_PROJECT_ROOT = Path(__file__).resolve().parents[2]


class ServiceConfig(BaseModel):
    """Service identity configuration."""

    model_config = ConfigDict(extra="forbid")
    name: str
    version: str


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    model_config = ConfigDict(extra="forbid")
    host: str
    port: int
    log_level: str


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")
    level: str
    directory: str | None


class RequestConfig(BaseModel):
    """Request handling configuration."""

    model_config = ConfigDict(extra="forbid")
    max_body_size: int = Field(gt=0)


class LimitsConfig(BaseModel):
    """Memory bounds for the in-process store."""

    model_config = ConfigDict(extra="forbid")
    max_api_keys: int = Field(gt=0)
    max_tasks_per_session: int = Field(gt=0)


class DelaysConfig(BaseModel):
    """Artificial latency per task route, in milliseconds."""

    model_config = ConfigDict(extra="forbid")
    list_tasks_ms: int = Field(ge=0)
    create_task_ms: int = Field(ge=0)
    update_task_ms: int = Field(ge=0)
    delete_task_ms: int = Field(ge=0)


class CorsConfig(BaseModel):
    """Cross-origin resource sharing configuration."""

    model_config = ConfigDict(extra="forbid")
    allow_origins: list[str]


class Settings(BaseModel):
    """
    Root configuration container.

    All fields are REQUIRED. No defaults exist.
    Missing fields cause immediate startup failure.
    """

    model_config = ConfigDict(extra="forbid")
    service: ServiceConfig
    server: ServerConfig
    logging: LoggingConfig
    request: RequestConfig
    limits: LimitsConfig
    delays: DelaysConfig
    cors: CorsConfig


def get_config_path() -> Path:
    """Determine configuration file path."""
    env_path = os.environ.get("CONFIG_PATH")
    if env_path:
        return Path(env_path)
    return _PROJECT_ROOT / "config.yaml"


def load_settings(config_path: Path) -> Settings:
    """
    Load and validate settings from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document is not a YAML mapping.
        pydantic.ValidationError: If fields are missing, unknown or invalid.
    """
    raw: Any = yaml.safe_load(config_path.read_text())
    if not isinstance(raw, dict):
        msg = f"Invalid config file: {config_path}"
        raise ValueError(msg)
    return Settings(**raw)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once and cache them for the process."""
    return load_settings(get_config_path())


def clear_settings_cache() -> None:
    """Drop cached settings. Used in testing."""
    get_settings.cache_clear()
