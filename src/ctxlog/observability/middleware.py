"""
ctxlog.observability.middleware

HTTP middleware for request-scoped logging context.

Responsibilities:
- Honor or generate trace/request ids and echo them on the response.
- Run each request inside its own logging context scope.
- Emit access logs and log unhandled request errors.
"""

from __future__ import annotations

from time import perf_counter

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from ctxlog.observability.context import (
    REQUEST_ID,
    TRACE_ID,
    context_scope,
    generate_trace_id,
    get_context,
)
from ctxlog.observability.logging import get_logger

TRACE_ID_HEADER = "x-trace-id"
REQUEST_ID_HEADER = "x-request-id"
TRACE_ID_RESPONSE_HEADER = "X-Trace-ID"
REQUEST_ID_RESPONSE_HEADER = "X-Request-ID"

AUTH_ERROR_STATUSES = frozenset({401, 403})

log = get_logger("ctxlog.access")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    - Ensures every request has a trace id and a request id
    - Binds them as the request's logging context
    - Logs access lines (optionally only auth failures)
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        environment: str = "development",
        skip_logging: bool = False,
        log_only_auth_errors: bool = False,
    ) -> None:
        super().__init__(app)
        self._environment = environment
        self._skip_logging = skip_logging
        self._log_only_auth_errors = log_only_auth_errors

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        # Prefer caller-provided ids for trace continuity; otherwise generate them.
        trace_id = _header_id(request, TRACE_ID_HEADER)
        request_id = _header_id(request, REQUEST_ID_HEADER)

        with context_scope({TRACE_ID: trace_id, REQUEST_ID: request_id}):
            with structlog.contextvars.bound_contextvars(
                path=request.url.path,
                method=request.method,
            ):
                start = perf_counter()
                try:
                    response = await call_next(request)
                except Exception:
                    context = get_context()
                    log.exception(
                        "request_failed",
                        url=str(request.url),
                        query=dict(request.query_params),
                        traceId=context.get(TRACE_ID, "-"),
                        requestId=context.get(REQUEST_ID, "-"),
                    )
                    raise

                self._log_access(response.status_code, (perf_counter() - start) * 1000.0)

        response.headers[TRACE_ID_RESPONSE_HEADER] = trace_id
        response.headers[REQUEST_ID_RESPONSE_HEADER] = request_id
        return response

    def should_log_access(self, status_code: int) -> bool:
        if self._skip_logging:
            return False
        if self._log_only_auth_errors:
            # Auth-failure auditing only applies to production; elsewhere it silences access logs.
            return self._environment == "production" and status_code in AUTH_ERROR_STATUSES
        return True

    def _log_access(self, status_code: int, elapsed_ms: float) -> None:
        if not self.should_log_access(status_code):
            return
        level = "warning" if self._log_only_auth_errors else "info"
        getattr(log, level)("http_request", status_code=status_code, elapsed_ms=round(elapsed_ms, 2))


def _header_id(request: Request, header: str) -> str:
    value = request.headers.get(header)
    # Caller ids are kept as sent so they correlate with upstream logs.
    return value or generate_trace_id()


# --- Module Notes -----------------------------------------------------------
# The context scope restores whatever was active before the request, so nothing
# leaks across requests even when the server reuses a task.
