"""Fixed-window request rate limiting.

The limiter is injected into the calling layer rather than kept as module
state, so its lifetime is the lifetime of the application that owns it:
counters start empty on every restart and are dropped with the app.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a rate-limit check."""

    allowed: bool
    remaining: int
    reset_in: float
    """Seconds until the current window ends."""


class RateLimiter(Protocol):
    """Structural rate-limiter interface.

    A shared backend (e.g. Redis) can implement the same two methods for
    multi-instance deployments.
    """

    def check(self, identifier: str) -> RateLimitResult: ...

    def reset(self) -> None: ...


@dataclass
class _Window:
    started_at: float
    count: int = 0


class InMemoryRateLimiter:
    """Process-local fixed-window limiter.

    Windows older than ``window`` seconds are swept on every check, so the
    number of tracked identifiers is bounded by the clients seen during the
    last window.
    """

    def __init__(
        self,
        limit: int,
        window: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        if window <= 0:
            raise ValueError("window must be positive")
        self._limit = limit
        self._window = window
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    @property
    def limit(self) -> int:
        return self._limit

    def __len__(self) -> int:
        return len(self._windows)

    def _sweep(self, now: float) -> None:
        expired = [key for key, win in self._windows.items() if now - win.started_at > self._window]
        for key in expired:
            del self._windows[key]

    def check(self, identifier: str) -> RateLimitResult:
        now = self._clock()
        self._sweep(now)

        win = self._windows.get(identifier)
        if win is None:
            self._windows[identifier] = _Window(started_at=now, count=1)
            return RateLimitResult(allowed=True, remaining=self._limit - 1, reset_in=self._window)

        reset_in = self._window - (now - win.started_at)
        if win.count >= self._limit:
            _logger.warning("Rate limit exceeded for %s", identifier)
            return RateLimitResult(allowed=False, remaining=0, reset_in=reset_in)

        win.count += 1
        return RateLimitResult(allowed=True, remaining=self._limit - win.count, reset_in=reset_in)

    def reset(self) -> None:
        self._windows.clear()
