"""
ctxlog.observability.sanitize

Log-injection guards for values that end up in log records.

Responsibilities:
- Escape control characters in free-form values.
- Validate correlation identifiers, service names and log levels.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ctxlog.observability.context import (
    DEVICE_ID,
    OPERATION_ID,
    REQUEST_ID,
    TRACE_ID,
    USER_ID,
    LoggingContext,
)

_UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)

_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\0": "\\0"})

# Identifiers that must look like UUIDs; the rest are free-form strings.
_UUID_KEYS = (TRACE_ID, OPERATION_ID)
_FREE_FORM_KEYS = (REQUEST_ID, DEVICE_ID, USER_ID)

MAX_SERVICE_NAME_LENGTH = 100

_LOG_LEVELS = {
    "critical": "critical",
    "error": "error",
    "warning": "warning",
    "warn": "warning",
    "info": "info",
    "debug": "debug",
}


def sanitize_for_logging(value: Any) -> str:
    if not isinstance(value, str):
        return str(value)
    return value.translate(_ESCAPES)


def validate_logging_context(context: Mapping[str, Any]) -> LoggingContext:
    """
    Keep only well-known keys with acceptable values, sanitized.

    `traceId`/`operationId` that are not UUID-shaped are dropped rather than repaired.
    """
    validated: LoggingContext = {}
    for key in _UUID_KEYS:
        value = context.get(key)
        if isinstance(value, str) and _UUID_RE.match(value):
            validated[key] = sanitize_for_logging(value)
    for key in _FREE_FORM_KEYS:
        value = context.get(key)
        if isinstance(value, str) and value:
            validated[key] = sanitize_for_logging(value)
    return validated


def validate_service_name(service: Any) -> str:
    if not isinstance(service, str) or not service.strip():
        return "default"
    return sanitize_for_logging(service.strip()[:MAX_SERVICE_NAME_LENGTH])


def validate_log_level(level: Any) -> str:
    if not isinstance(level, str):
        return "info"
    return _LOG_LEVELS.get(level.lower(), "info")
