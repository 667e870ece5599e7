"""
ctxlog.api.routers.health

Health and diagnostics endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Expose the logging context seen by a request handler (`/context`).
"""

from __future__ import annotations

from fastapi import APIRouter

from ctxlog.observability.context import get_context
from ctxlog.observability.logging import get_logger

router = APIRouter()

log = get_logger(__name__)


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    # Liveness: process is up and serving HTTP.
    return {"status": "ok"}


@router.get("/context")
async def context() -> dict[str, str]:
    log.debug("context_requested")
    return get_context()
