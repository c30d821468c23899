"""Upstream access layer -- rate limiting, retrying fetch, chart endpoint helpers."""

from yfmcp.upstream.chart import VALID_INTERVALS, VALID_PERIODS, resolve_period
from yfmcp.upstream.fetcher import BROWSER_HEADERS, ResilientFetcher
from yfmcp.upstream.rate_limiter import RateLimiter, RateWindowState

__all__ = [
    "BROWSER_HEADERS",
    "RateLimiter",
    "RateWindowState",
    "ResilientFetcher",
    "VALID_INTERVALS",
    "VALID_PERIODS",
    "resolve_period",
]
