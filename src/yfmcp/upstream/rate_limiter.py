"""Fixed-window rate limiter guarding every upstream request.

Two independent counters (per minute, per day). A window resets only when a
call arrives after its length has elapsed, so bursts straddling a reset edge
can briefly exceed the nominal rate. That imprecision is accepted.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass

from yfmcp.config import RateLimitSettings
from yfmcp.exceptions import RateLimitExceeded
from yfmcp.logging import get_logger

logger = get_logger(__name__)


@dataclass
class RateWindowState:
    """Counters and window anchors. Mutated only under RateLimiter's lock."""

    minute_count: int
    day_count: int
    minute_window_start: float
    day_window_start: float


class RateLimiter:
    """Per-process request quota shared by all pipelines.

    Uses asyncio.Lock so that overlapping tool calls check and increment the
    counters as a single step.

    Args:
        settings: Quotas and window lengths.
        clock: Monotonic time source in seconds (injectable for tests).
    """

    def __init__(
        self,
        settings: RateLimitSettings,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._settings = settings
        self._clock = clock
        now = clock()
        self._state = RateWindowState(
            minute_count=0,
            day_count=0,
            minute_window_start=now,
            day_window_start=now,
        )
        self._lock = asyncio.Lock()

    async def check_and_increment(self) -> None:
        """Count one request, or raise RateLimitExceeded without counting it."""
        async with self._lock:
            now = self._clock()
            state = self._state

            if now - state.minute_window_start > self._settings.minute_window_seconds:
                state.minute_count = 0
                state.minute_window_start = now

            if now - state.day_window_start > self._settings.day_window_seconds:
                state.day_count = 0
                state.day_window_start = now

            if (
                state.minute_count >= self._settings.per_minute
                or state.day_count >= self._settings.per_day
            ):
                logger.warning("rate_limit_rejected", **self._status_locked())
                raise RateLimitExceeded("Rate limit exceeded. Please try again later.")

            state.minute_count += 1
            state.day_count += 1

    def status(self) -> dict[str, int]:
        """Return current counts, limits and remaining allowance."""
        return self._status_locked()

    def _status_locked(self) -> dict[str, int]:
        state = self._state
        return {
            "calls_this_minute": state.minute_count,
            "minute_limit": self._settings.per_minute,
            "minute_remaining": max(0, self._settings.per_minute - state.minute_count),
            "calls_today": state.day_count,
            "daily_limit": self._settings.per_day,
            "daily_remaining": max(0, self._settings.per_day - state.day_count),
        }

    @property
    def state(self) -> RateWindowState:
        """Current window state (read-only use)."""
        return self._state
