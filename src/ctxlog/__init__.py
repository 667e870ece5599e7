"""
ctxlog

Request-scoped contextual logging.

Responsibilities:
- Expose package version metadata.
- Re-export the context and rate-limit operations used by applications.
"""

from ctxlog.observability.context import (
    clear_context,
    context_scope,
    generate_trace_id,
    get_context,
    operation_scope,
    set_context,
    with_operation_context,
)
from ctxlog.observability.rate_limit import check_rate_limit, reset_rate_limit
from ctxlog.observability.sanitize import (
    sanitize_for_logging,
    validate_log_level,
    validate_logging_context,
    validate_service_name,
)

__all__ = [
    "__version__",
    "check_rate_limit",
    "clear_context",
    "context_scope",
    "generate_trace_id",
    "get_context",
    "operation_scope",
    "reset_rate_limit",
    "sanitize_for_logging",
    "set_context",
    "validate_log_level",
    "validate_logging_context",
    "validate_service_name",
    "with_operation_context",
]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Only the dependency-free core (context, rate limit, sanitizers) is re-exported; importing `ctxlog` must not pull in
# structlog/starlette configuration side effects.
