"""Stock history pipeline: validated period/interval -> chart window -> table report.

Stricter than the quote and market pipelines: bad arguments and non-success
statuses are hard errors. Only an empty result and formatting trouble come
back as plain text.
"""

from __future__ import annotations

from yfmcp.exceptions import FetchFailure, FormattingError, UpstreamError
from yfmcp.formatting.history import format_history
from yfmcp.logging import get_logger
from yfmcp.models import HistorySeries
from yfmcp.pipelines.base import PAYLOAD_ERRORS, ChartPipeline
from yfmcp.upstream.chart import (
    decode_payload,
    first_result,
    resolve_period,
    validate_interval,
    validate_period,
)

logger = get_logger(__name__)

DEFAULT_PERIOD = "1mo"
DEFAULT_INTERVAL = "1d"


class StockHistoryPipeline(ChartPipeline):
    """Fetches and renders OHLCV history for a single ticker."""

    async def run(
        self,
        symbol: str,
        period: str = DEFAULT_PERIOD,
        interval: str = DEFAULT_INTERVAL,
    ) -> str:
        """Return the history report.

        Arguments are validated before any quota is consumed, so an invalid
        call never reaches the network.

        Raises:
            InvalidArgument: period or interval outside the allowed set.
            RateLimitExceeded: Quota used up.
            FetchFailure: Retries exhausted.
            UpstreamError: Non-success status or unreadable body.
        """
        validate_period(period)
        validate_interval(interval)
        period1, period2 = resolve_period(period, now=self._clock())

        try:
            response = await self._fetch_chart(symbol, period1, period2, interval)
        except FetchFailure as exc:
            raise FetchFailure(f"Failed to fetch stock history: {exc}") from exc

        if not response.is_success:
            logger.warning(
                "history_upstream_error",
                symbol=symbol,
                status=response.status_code,
                reason=response.reason_phrase,
            )
            raise UpstreamError(
                "Failed to fetch stock history: "
                f"API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                reason=response.reason_phrase,
            )

        try:
            result = first_result(decode_payload(response))
        except UpstreamError as exc:
            raise UpstreamError(
                f"Failed to fetch stock history: {exc}",
                status_code=exc.status_code,
                reason=exc.reason,
            ) from exc

        if result is None:
            logger.info("history_no_result", symbol=symbol, period=period)
            return f"No historical data found for symbol: {symbol}"

        try:
            series = HistorySeries.from_chart_result(result, symbol)
            report = format_history(series, period, interval, self._settings.history_max_rows)
        except FormattingError as exc:
            logger.warning("history_formatting_failed", symbol=symbol, error=str(exc))
            return str(exc)
        except PAYLOAD_ERRORS as exc:
            logger.warning("history_formatting_failed", symbol=symbol, error=str(exc))
            return f"Error formatting stock history: {exc}"

        logger.debug("history_rendered", symbol=symbol, points=len(series.points))
        return report
