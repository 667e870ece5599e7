"""
ctxlog.observability

Observability package.

Responsibilities:
- Request-scoped logging context (`context`).
- Fixed-window rate limiting of log emission (`rate_limit`).
- Structured logging configuration and HTTP middleware (`logging`, `middleware`).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# `context` and `rate_limit` import nothing else from this package; keep it that way.
