"""Entry point for the Todo Service.

Usage::

    python -m todo_service
"""

from __future__ import annotations

import uvicorn

from todo_service.config import get_settings


def main() -> None:
    """Run the service with the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "todo_service.app:create_app",
        factory=True,
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.server.log_level,
    )


if __name__ == "__main__":
    main()
