"""Chart endpoint helpers: request construction and response unwrapping.

Response shape:
    {"chart": {"result": [{"meta": {...}, "timestamp": [...],
                           "indicators": {"quote": [{open, high, low, close, volume}],
                                          "adjclose": [{adjclose}]}}],
               "error": null}}

Period lengths are calendar approximations (30-day months, 365-day years).
"""

import time
from datetime import datetime
from urllib.parse import quote

import httpx

from yfmcp.exceptions import InvalidArgument, UpstreamError

DAY_SECONDS = 86_400

VALID_PERIODS: tuple[str, ...] = (
    "1d", "5d", "1mo", "3mo", "6mo", "1y", "2y", "5y", "10y", "ytd", "max",
)
VALID_INTERVALS: tuple[str, ...] = (
    "1m", "2m", "5m", "15m", "30m", "60m", "90m", "1h", "1d", "5d", "1wk", "1mo", "3mo",
)

# Seconds before "now" for fixed-length periods; ytd and max are computed.
PERIOD_LENGTHS: dict[str, int] = {
    "1d": DAY_SECONDS,
    "5d": 5 * DAY_SECONDS,
    "1mo": 30 * DAY_SECONDS,
    "3mo": 90 * DAY_SECONDS,
    "6mo": 180 * DAY_SECONDS,
    "1y": 365 * DAY_SECONDS,
    "2y": 2 * 365 * DAY_SECONDS,
    "5y": 5 * 365 * DAY_SECONDS,
    "10y": 10 * 365 * DAY_SECONDS,
}


def validate_period(period: str) -> None:
    if period not in VALID_PERIODS:
        raise InvalidArgument(
            f"Invalid period: {period}. Valid periods are: {', '.join(VALID_PERIODS)}"
        )


def validate_interval(interval: str) -> None:
    if interval not in VALID_INTERVALS:
        raise InvalidArgument(
            f"Invalid interval: {interval}. Valid intervals are: {', '.join(VALID_INTERVALS)}"
        )


def resolve_period(period: str, now: float | None = None) -> tuple[int, int]:
    """Turn a named period into an absolute (period1, period2) window in Unix seconds.

    period2 is always "now". ytd starts at local midnight on January 1st of
    the current year; max starts at the epoch.
    """
    validate_period(period)
    period2 = int(now if now is not None else time.time())

    if period == "ytd":
        start_of_year = datetime.fromtimestamp(period2).replace(
            month=1, day=1, hour=0, minute=0, second=0, microsecond=0
        )
        return int(start_of_year.timestamp()), period2
    if period == "max":
        return 0, period2
    return period2 - PERIOD_LENGTHS[period], period2


def chart_url(base_url: str, symbol: str) -> str:
    """Return the chart URL for a symbol, percent-encoding it as one path segment."""
    return f"{base_url.rstrip('/')}/{quote(symbol, safe='')}"


def chart_params(period1: int, period2: int, interval: str) -> dict[str, str | int]:
    return {
        "period1": period1,
        "period2": period2,
        "interval": interval,
        "events": "history",
    }


def decode_payload(response: httpx.Response) -> dict:
    """Decode a chart response body, raising UpstreamError if it is not a JSON object."""
    try:
        payload = response.json()
    except ValueError as exc:
        raise UpstreamError(
            f"Invalid JSON from upstream: {exc}",
            status_code=response.status_code,
            reason=response.reason_phrase,
        ) from exc
    if not isinstance(payload, dict):
        raise UpstreamError(
            "Unexpected response shape from upstream",
            status_code=response.status_code,
            reason=response.reason_phrase,
        )
    return payload


def first_result(payload: dict) -> dict | None:
    """Return chart.result[0], or None if the payload carries no result entry."""
    chart = payload.get("chart")
    if not isinstance(chart, dict):
        return None
    results = chart.get("result")
    if not results or not isinstance(results[0], dict):
        return None
    return results[0]
