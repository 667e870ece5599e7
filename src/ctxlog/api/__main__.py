"""
ctxlog.api.__main__

Entrypoint for running the demo service via `python -m ctxlog.api`.

Responsibilities:
- Load settings.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from ctxlog.api.app import create_app
from ctxlog.observability.logging import get_logger
from ctxlog.settings import get_settings

log = get_logger(__name__)


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    log.info(
        "serving",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level,
        log_format=settings.log_format,
        rate_limit=settings.rate_limit,
        rate_limit_window_ms=settings.rate_limit_window_ms,
    )
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
