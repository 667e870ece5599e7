"""
ctxlog.observability.logging

Structured logging configuration (the logger facade).

Responsibilities:
- Configure `structlog` once per process, for JSON or console output.
- Gate every event through the process-wide rate limiter (drop, never block).
- Decorate every event with the current logging context and service metadata.
- Provide a small wrapper for obtaining bound loggers.
"""

from __future__ import annotations

import logging
import socket
import sys
from typing import Any

import structlog

from ctxlog.observability.context import get_context
from ctxlog.observability.rate_limit import check_rate_limit, configure_rate_limit
from ctxlog.settings import Settings


def configure_logging(*, settings: Settings) -> None:
    """
    Structured logs: JSON lines in production, colored console lines in development.
    """

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    # basicConfig is a no-op once root has handlers; the level must still apply.
    logging.getLogger().setLevel(level)

    configure_rate_limit(limit=settings.rate_limit, window_size_ms=settings.rate_limit_window_ms)

    structlog.configure(
        processors=build_processors(settings),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def build_processors(settings: Settings) -> list[Any]:
    # Level filtering comes before the gate: only records that will be written use up budget.
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.stdlib.filter_by_level,
        rate_limit_gate,
        structlog.contextvars.merge_contextvars,
        add_logging_context,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service_metadata(
            service_name=settings.service_name,
            environment=settings.env,
            hostname=socket.gethostname(),
        ),
        structlog.processors.dict_tracebacks,
        renderer,
    ]


def rate_limit_gate(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    if not check_rate_limit():
        raise structlog.DropEvent
    return event_dict


def add_logging_context(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    # Explicit event fields win over the ambient context.
    for key, value in get_context().items():
        if value:
            event_dict.setdefault(key, value)
    return event_dict


def _add_service_metadata(*, service_name: str, environment: str, hostname: str):
    # Stable routing fields for aggregation across hosts/environments.
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        event_dict.setdefault("hostname", hostname)
        event_dict.setdefault("environment", environment)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Request-scoped identifiers are set by `observability.middleware`; code outside HTTP
# requests uses `observability.context.context_scope` to get the same decoration.
