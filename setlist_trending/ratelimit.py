from __future__ import annotations

import time
from typing import Callable

from pydantic import BaseModel

from setlist_trending.log import get_logger

logger = get_logger("ratelimit")


class RateLimitStatus(BaseModel):
    calls_remaining: int
    reset_in_seconds: float
    is_limited: bool


class RateLimiter:
    """Sliding-window call limiter keyed by name.

    Holds at most `max_calls` timestamps per key inside `window_seconds`.
    The clock is injectable so tests can move time by hand.
    """

    def __init__(
        self,
        max_calls: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_calls < 1:
            raise ValueError("max_calls must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_calls = max_calls
        self.window_seconds = window_seconds
        self._clock = clock
        self._calls: dict[str, list[float]] = {}

    def _live(self, key: str, now: float) -> list[float]:
        calls = [t for t in self._calls.get(key, []) if now - t < self.window_seconds]
        self._calls[key] = calls
        return calls

    def try_acquire(self, key: str) -> bool:
        """Record a call for `key` if the window has room. Returns False when limited."""
        now = self._clock()
        calls = self._live(key, now)
        if len(calls) >= self.max_calls:
            logger.debug("rate_limited", key=key, calls=len(calls), max_calls=self.max_calls)
            return False
        calls.append(now)
        return True

    def status(self, key: str) -> RateLimitStatus:
        now = self._clock()
        calls = self._live(key, now)
        remaining = max(0, self.max_calls - len(calls))
        reset_in = max(0.0, self.window_seconds - (now - calls[0])) if calls else 0.0
        return RateLimitStatus(
            calls_remaining=remaining,
            reset_in_seconds=reset_in,
            is_limited=remaining == 0,
        )

    def reset(self, key: str | None = None) -> None:
        """Forget recorded calls for one key, or for every key."""
        if key is None:
            self._calls.clear()
        else:
            self._calls.pop(key, None)
