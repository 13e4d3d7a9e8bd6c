"""Shared test helpers."""

from __future__ import annotations

from pathlib import Path


def write_config(
    tmp_path: Path,
    *,
    max_api_keys: int = 10000,
    max_tasks_per_session: int = 10,
    max_body_size: int = 16384,
    create_task_ms: int = 0,
    update_task_ms: int = 0,
    log_directory: str | None = None,
) -> Path:
    """Write a complete config.yaml into tmp_path and return its path."""
    directory = "null" if log_directory is None else f'"{log_directory}"'
    config_content = f"""\
service:
  name: "todo"
  version: "0.1.0"
server:
  host: "127.0.0.1"
  port: 5000
  log_level: "info"
logging:
  level: "INFO"
  directory: {directory}
request:
  max_body_size: {max_body_size}
limits:
  max_api_keys: {max_api_keys}
  max_tasks_per_session: {max_tasks_per_session}
delays:
  list_tasks_ms: 0
  create_task_ms: {create_task_ms}
  update_task_ms: {update_task_ms}
  delete_task_ms: 0
cors:
  allow_origins:
    - "*"
"""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(config_content)
    return config_path
