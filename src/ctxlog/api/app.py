"""
ctxlog.api.app

FastAPI app factory for the demo service.

Responsibilities:
- Configure structured logging before the app serves requests.
- Install the request-context middleware and register routers.
"""

from __future__ import annotations

from fastapi import FastAPI

from ctxlog import __version__
from ctxlog.api.routers.health import router as health_router
from ctxlog.observability.logging import configure_logging, get_logger
from ctxlog.observability.middleware import RequestContextMiddleware
from ctxlog.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(settings=settings)

    app = FastAPI(
        title=settings.service_name,
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        RequestContextMiddleware,
        environment=settings.env,
        skip_logging=settings.http_skip_logging,
        log_only_auth_errors=settings.http_log_only_auth_errors,
    )
    app.include_router(health_router, tags=["health"])

    log.info("app_created", env=settings.env)
    return app


# --- Module Notes -----------------------------------------------------------
# Composition root only; context and rate-limit logic live in `ctxlog.observability`.
