"""
ctxlog.observability.context

Request-scoped logging context store.

Responsibilities:
- Hold the correlation identifiers of the current logical unit of work.
- Merge partial updates (shallow, last write wins) and clear the slot.
- Generate trace/operation identifiers.
- Keep concurrently running units of work isolated from each other.
"""

from __future__ import annotations

import contextvars
import uuid
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from types import MappingProxyType

LoggingContext = dict[str, str]

TRACE_ID = "traceId"
REQUEST_ID = "requestId"
OPERATION_ID = "operationId"
DEVICE_ID = "deviceId"
USER_ID = "userId"

WELL_KNOWN_KEYS: tuple[str, ...] = (TRACE_ID, REQUEST_ID, OPERATION_ID, DEVICE_ID, USER_ID)

# One slot per unit of work. asyncio tasks copy the contextvars snapshot when they are
# created, so children inherit the parent's context and never write back into it.
_current: contextvars.ContextVar[Mapping[str, str] | None] = contextvars.ContextVar(
    "ctxlog_logging_context",
    default=None,
)


def set_context(partial: Mapping[str, str]) -> None:
    # Snapshots are replaced, never mutated in place: a task that copied the old one keeps it.
    current = _current.get()
    merged = {**current, **partial} if current else dict(partial)
    _current.set(MappingProxyType(merged))


def get_context() -> LoggingContext:
    current = _current.get()
    return dict(current) if current else {}


def clear_context() -> None:
    _current.set(None)


def generate_trace_id() -> str:
    """
    Random 128-bit identifier in canonical hyphenated form.
    """
    return str(uuid.uuid4())


def with_operation_context(data: Mapping[str, str] | None = None) -> str:
    """
    Merge `data` plus an `operationId` into the current context and return the id.

    The previous context is not restored afterwards; use `operation_scope` for that.
    """
    data = dict(data or {})
    operation_id = data.get(OPERATION_ID) or generate_trace_id()
    set_context({**data, OPERATION_ID: operation_id})
    return operation_id


@contextmanager
def context_scope(initial: Mapping[str, str] | None = None) -> Iterator[None]:
    """
    Start a fresh context for a unit of work and restore the previous one on exit.
    """
    token = _current.set(MappingProxyType(dict(initial)) if initial else None)
    try:
        yield
    finally:
        _current.reset(token)


@contextmanager
def operation_scope(data: Mapping[str, str] | None = None) -> Iterator[str]:
    # Same merge as `with_operation_context`, undone on exit (including on error).
    snapshot = _current.get()
    try:
        yield with_operation_context(data)
    finally:
        _current.set(snapshot)


# --- Module Notes -----------------------------------------------------------
# Work handed to a thread pool only sees this context when submitted through
# `asyncio.to_thread` or `contextvars.copy_context().run`.
