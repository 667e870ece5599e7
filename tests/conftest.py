"""
tests.conftest

Shared fixtures.

Responsibilities:
- Reset the logging context, stdlib logger levels and the process-wide rate limiter around every test.
- Provide a controllable millisecond clock.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from ctxlog.observability.context import clear_context
from ctxlog.observability.rate_limit import configure_rate_limit
from ctxlog.settings import get_settings


class FakeClock:
    def __init__(self, now: float = 1_000_000) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture(autouse=True)
def _isolate_global_state() -> Iterator[None]:
    clear_context()
    get_settings.cache_clear()
    levels = _logger_levels()
    yield
    _restore_logger_levels(levels)
    clear_context()
    get_settings.cache_clear()
    configure_rate_limit()


def _logger_levels() -> dict[str, int]:
    levels = {"": logging.getLogger().level}
    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger):
            levels[name] = logger.level
    return levels


def _restore_logger_levels(levels: dict[str, int]) -> None:
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if isinstance(logger, logging.Logger):
            logger.setLevel(levels.get(name, logging.NOTSET))
    logging.getLogger().setLevel(levels[""])


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
