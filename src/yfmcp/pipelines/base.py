"""Shared request step for all chart pipelines: rate limit, build URL, fetch."""

from __future__ import annotations

import time
from collections.abc import Callable

import httpx

from yfmcp.config import ChartApiSettings
from yfmcp.logging import get_logger
from yfmcp.upstream.chart import chart_params, chart_url
from yfmcp.upstream.fetcher import ResilientFetcher
from yfmcp.upstream.rate_limiter import RateLimiter

logger = get_logger(__name__)

# Raised by extraction code on payloads whose fields have unexpected types.
PAYLOAD_ERRORS: tuple[type[Exception], ...] = (
    ArithmeticError,
    AttributeError,
    TypeError,
    ValueError,
)


class ChartPipeline:
    """Base class wiring the rate limiter and fetcher into one request step.

    Args:
        rate_limiter: Process-wide quota, consulted before every request.
        fetcher: Retrying HTTP GET wrapper.
        settings: Chart endpoint location and report sizing.
        clock: Wall-clock source in Unix seconds (injectable for tests).
    """

    def __init__(
        self,
        rate_limiter: RateLimiter,
        fetcher: ResilientFetcher,
        settings: ChartApiSettings,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._rate_limiter = rate_limiter
        self._fetcher = fetcher
        self._settings = settings
        self._clock = clock

    async def _fetch_chart(
        self, symbol: str, period1: int, period2: int, interval: str
    ) -> httpx.Response:
        """Consume one rate-limit slot and GET the chart for symbol.

        Raises:
            RateLimitExceeded: Quota used up; no request is made.
            FetchFailure: Retries exhausted.
        """
        await self._rate_limiter.check_and_increment()
        url = chart_url(self._settings.base_url, symbol)
        logger.debug(
            "fetching_chart",
            symbol=symbol,
            url=url,
            period1=period1,
            period2=period2,
            interval=interval,
        )
        return await self._fetcher.fetch(url, params=chart_params(period1, period2, interval))

    async def _fetch_snapshot(self, symbol: str) -> httpx.Response:
        """Fetch a "current" chart: a short window ending now, daily interval."""
        now = int(self._clock())
        return await self._fetch_chart(
            symbol, now - self._settings.snapshot_window_seconds, now, "1d"
        )
