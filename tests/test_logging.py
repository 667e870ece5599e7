"""
tests.test_logging

Logger facade processors.

Responsibilities:
- Context decoration of log events.
- Silent dropping of events over the rate limit.
- Full processor chain rendering JSON with service metadata.
"""

from __future__ import annotations

import json
import logging
import socket

import pytest
import structlog

from ctxlog.observability.context import context_scope
from ctxlog.observability.logging import (
    add_logging_context,
    build_processors,
    configure_logging,
    get_logger,
    rate_limit_gate,
)
from ctxlog.observability.rate_limit import configure_rate_limit, get_rate_limiter
from ctxlog.settings import Settings


def _run_chain(settings: Settings, event_dict: dict) -> dict:
    logger = logging.getLogger("tests.logging")
    logger.setLevel(logging.DEBUG)
    processors = build_processors(settings)
    for processor in processors[:-1]:
        event_dict = processor(logger, "info", event_dict)
    return json.loads(processors[-1](logger, "info", event_dict))


def test_add_logging_context_forwards_known_and_extra_keys() -> None:
    with context_scope({"traceId": "T1", "requestId": "R1", "tenant": "acme", "userId": ""}):
        event = add_logging_context(None, "info", {"event": "hello"})

    assert event == {"event": "hello", "traceId": "T1", "requestId": "R1", "tenant": "acme"}


def test_add_logging_context_keeps_explicit_fields() -> None:
    with context_scope({"traceId": "T1"}):
        event = add_logging_context(None, "info", {"event": "hello", "traceId": "explicit"})

    assert event["traceId"] == "explicit"


def test_add_logging_context_without_context_is_noop() -> None:
    assert add_logging_context(None, "info", {"event": "hello"}) == {"event": "hello"}


def test_rate_limit_gate_drops_over_limit(clock) -> None:
    configure_rate_limit(limit=2, clock=clock)

    assert rate_limit_gate(None, "info", {"event": "a"}) == {"event": "a"}
    assert rate_limit_gate(None, "info", {"event": "b"}) == {"event": "b"}
    with pytest.raises(structlog.DropEvent):
        rate_limit_gate(None, "info", {"event": "c"})

    clock.advance(1000)
    assert rate_limit_gate(None, "info", {"event": "d"}) == {"event": "d"}


def test_processor_chain_renders_decorated_json() -> None:
    settings = Settings(env="test", service_name="orders")

    with context_scope({"traceId": "T1", "operationId": "op-1", "deviceId": "dev-9"}):
        record = _run_chain(settings, {"event": "order_placed", "order": 7})

    assert record["event"] == "order_placed"
    assert record["order"] == 7
    assert record["traceId"] == "T1"
    assert record["operationId"] == "op-1"
    assert record["deviceId"] == "dev-9"
    assert record["level"] == "info"
    assert record["logger"] == "tests.logging"
    assert record["service"] == "orders"
    assert record["environment"] == "test"
    assert record["hostname"] == socket.gethostname()
    assert "timestamp" in record


def test_processor_chain_uses_console_renderer_for_text() -> None:
    processors = build_processors(Settings(env="development"))

    assert processors[0] is structlog.stdlib.filter_by_level
    assert processors[1] is rate_limit_gate
    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


def test_configure_logging_applies_rate_limit_settings() -> None:
    configure_logging(settings=Settings(env="test", rate_limit=5, rate_limit_window_ms=250))

    limiter = get_rate_limiter()
    assert limiter.limit == 5
    assert limiter.window_size_ms == 250


def _written(caplog: pytest.LogCaptureFixture, name: str) -> list[dict]:
    return [json.loads(r.getMessage()) for r in caplog.records if r.name == name]


def test_over_limit_events_are_dropped_silently(caplog: pytest.LogCaptureFixture) -> None:
    configure_logging(settings=Settings(env="test", rate_limit=2, rate_limit_window_ms=60_000))
    log = get_logger("tests.logging.drop")

    for i in range(3):
        log.info("tick", n=i)

    assert [e["n"] for e in _written(caplog, "tests.logging.drop")] == [0, 1]
    assert get_rate_limiter().state.count == 2


def test_filtered_levels_do_not_use_rate_budget(caplog: pytest.LogCaptureFixture) -> None:
    configure_logging(settings=Settings(env="production", log_level="info"))
    log = get_logger("tests.logging.levels")

    for _ in range(1000):
        log.debug("noise")

    assert get_rate_limiter().state.count == 0
    assert _written(caplog, "tests.logging.levels") == []

    log.info("kept")

    assert get_rate_limiter().state.count == 1
    assert [e["event"] for e in _written(caplog, "tests.logging.levels")] == ["kept"]
