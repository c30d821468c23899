"""Retrying HTTP GET wrapper for the chart endpoint.

The upstream rejects requests that do not look like they come from a
browser, so every request carries BROWSER_HEADERS.

Retry policy:
- request failure (DNS, connect, reset, timeout, redirect loop, undecodable
  body): back off and retry
- HTTP 429: back off and retry, without recording a transport error
- any other status, 2xx or not: returned to the caller untouched

Delays are retry_base_delay * 2**attempt with no cap. No delay follows the
final attempt; the failure is raised straight away.
"""

from __future__ import annotations

import asyncio
import random

import httpx

from yfmcp.config import FetchSettings
from yfmcp.exceptions import FetchFailure
from yfmcp.logging import get_logger

logger = get_logger(__name__)

BROWSER_HEADERS: dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,image/apng,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Referer": "https://finance.yahoo.com/",
}

HTTP_TOO_MANY_REQUESTS = 429


class ResilientFetcher:
    """Issues GET requests with bounded retries and exponential backoff.

    Usage:
        async with httpx.AsyncClient() as client:
            fetcher = ResilientFetcher(client, settings.fetch)
            response = await fetcher.fetch(url, params={"interval": "1d"})

    Args:
        client: Shared httpx.AsyncClient. Owned by the caller, who closes it.
        settings: Retry count, base delay, timeout and jitter switch.
    """

    def __init__(self, client: httpx.AsyncClient, settings: FetchSettings) -> None:
        self._client = client
        self._settings = settings

    async def fetch(
        self,
        url: str,
        params: dict | None = None,
        headers: dict[str, str] | None = None,
        max_retries: int | None = None,
    ) -> httpx.Response:
        """GET url, retrying transport failures and 429s.

        Returns:
            The first response whose status is not 429.

        Raises:
            FetchFailure: All attempts failed. Wraps the last request error,
                or reports "Maximum retries exceeded" if every attempt was a 429.
        """
        attempts = max_retries if max_retries is not None else self._settings.max_retries
        request_headers = headers if headers is not None else BROWSER_HEADERS
        last_error: httpx.RequestError | None = None

        for attempt in range(attempts):
            try:
                response = await self._client.get(
                    url,
                    params=params,
                    headers=request_headers,
                    timeout=self._settings.timeout_seconds,
                )
            except httpx.RequestError as exc:
                last_error = exc
                logger.warning(
                    "fetch_retry",
                    url=url,
                    attempt=attempt + 1,
                    max_retries=attempts,
                    error=str(exc) or type(exc).__name__,
                )
            else:
                if response.status_code != HTTP_TOO_MANY_REQUESTS:
                    return response
                logger.warning(
                    "upstream_rate_limited",
                    url=url,
                    attempt=attempt + 1,
                    max_retries=attempts,
                )

            if attempt < attempts - 1:
                await asyncio.sleep(self._backoff_delay(attempt))

        if last_error is not None:
            message = str(last_error) or type(last_error).__name__
            logger.error("fetch_failed_permanently", url=url, attempts=attempts, error=message)
            raise FetchFailure(message) from last_error

        logger.error("fetch_failed_permanently", url=url, attempts=attempts, error="429")
        raise FetchFailure("Maximum retries exceeded")

    def _backoff_delay(self, attempt: int) -> float:
        delay = self._settings.retry_base_delay * (2**attempt)
        if self._settings.jitter:
            delay += random.uniform(0, delay * 0.1)
        return delay
