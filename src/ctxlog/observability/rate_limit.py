"""
ctxlog.observability.rate_limit

Fixed-window rate limiter guarding the logging pipeline.

Responsibilities:
- Cap accepted log emissions per fixed time window (default 1000 per 1000 ms).
- Expose a single process-wide limiter shared by every logger and unit of work.
- Provide reset/configure hooks for process start and tests.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

DEFAULT_LIMIT = 1000
DEFAULT_WINDOW_SIZE_MS = 1000

Clock = Callable[[], float]


def _now_ms() -> float:
    # Monotonic: a wall-clock step backwards must not freeze window rollover.
    return time.monotonic() * 1000.0


@dataclass
class RateLimitState:
    window_start_time: float
    count: int = 0


class FixedWindowRateLimiter:
    """
    Counts emissions in fixed windows; the counter drops to zero when a window expires.

    Bursts straddling a rollover can reach 2x `limit` within one window length.
    """

    def __init__(
        self,
        *,
        limit: int = DEFAULT_LIMIT,
        window_size_ms: float = DEFAULT_WINDOW_SIZE_MS,
        clock: Clock | None = None,
    ) -> None:
        self.limit = limit
        self.window_size_ms = window_size_ms
        self._clock = clock or _now_ms
        # Loggers are called from worker threads too; the check-increment must be atomic.
        self._lock = Lock()
        self._state = RateLimitState(window_start_time=self._clock())

    @property
    def state(self) -> RateLimitState:
        with self._lock:
            return RateLimitState(self._state.window_start_time, self._state.count)

    def check(self) -> bool:
        with self._lock:
            now = self._clock()
            if now - self._state.window_start_time >= self.window_size_ms:
                self._state.count = 0
                self._state.window_start_time = now

            if self._state.count < self.limit:
                self._state.count += 1
                return True
            return False

    def reset(self, now: float | None = None) -> None:
        with self._lock:
            self._state = RateLimitState(window_start_time=self._clock() if now is None else now)


_LIMITER = FixedWindowRateLimiter()


def get_rate_limiter() -> FixedWindowRateLimiter:
    return _LIMITER


def configure_rate_limit(
    *,
    limit: int = DEFAULT_LIMIT,
    window_size_ms: float = DEFAULT_WINDOW_SIZE_MS,
    clock: Clock | None = None,
) -> FixedWindowRateLimiter:
    """
    Replace the process-wide limiter (fresh window, zero count).
    """
    global _LIMITER
    _LIMITER = FixedWindowRateLimiter(limit=limit, window_size_ms=window_size_ms, clock=clock)
    return _LIMITER


def check_rate_limit() -> bool:
    return _LIMITER.check()


def reset_rate_limit(now: float | None = None) -> None:
    _LIMITER.reset(now)


# --- Module Notes -----------------------------------------------------------
# Default timestamps are monotonic milliseconds; `reset(now)` and injected clocks
# must use the same time base as the limiter they drive. Callers that need strict quotas should layer
# a sliding-window or token-bucket limiter on top; this one is storm protection.
