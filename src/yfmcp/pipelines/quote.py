"""Stock quote pipeline: snapshot chart -> QuoteRecord -> quote report.

Only rate limiting and exhausted retries are hard errors here. A non-success
status, an unreadable body or an empty result yields an apology text.
"""

from __future__ import annotations

from yfmcp.exceptions import FetchFailure, FormattingError, UpstreamError
from yfmcp.formatting.quote import format_partial_quote, format_quote
from yfmcp.logging import get_logger
from yfmcp.models import QuoteRecord
from yfmcp.pipelines.base import PAYLOAD_ERRORS, ChartPipeline
from yfmcp.upstream.chart import decode_payload, first_result

logger = get_logger(__name__)


def unavailable_message(symbol: str) -> str:
    return (
        f"Unable to retrieve data for symbol: {symbol}. The ticker symbol may be "
        "invalid or Yahoo Finance data may be temporarily unavailable."
    )


def basic_quote_diagnostic(symbol: str) -> str:
    return (
        f"Basic data for {symbol} could not be retrieved. "
        "The Yahoo Finance API may be temporarily unavailable."
    )


class StockQuotePipeline(ChartPipeline):
    """Fetches and renders the current quote for a single ticker."""

    async def run(self, symbol: str) -> str:
        """Return the quote report, or an apology text for soft failures.

        Raises:
            RateLimitExceeded: Quota used up.
            FetchFailure: Transport errors or 429s exhausted all retries.
        """
        try:
            response = await self._fetch_snapshot(symbol)
        except FetchFailure as exc:
            raise FetchFailure(f"Failed to fetch stock quote: {exc}") from exc

        if not response.is_success:
            logger.info("quote_unavailable", symbol=symbol, status=response.status_code)
            return unavailable_message(symbol)

        try:
            result = first_result(decode_payload(response))
        except UpstreamError as exc:
            logger.warning("quote_payload_unreadable", symbol=symbol, error=str(exc))
            return unavailable_message(symbol)

        if result is None:
            logger.info("quote_no_result", symbol=symbol)
            return unavailable_message(symbol)

        if isinstance(result.get("meta"), dict):
            try:
                return format_quote(QuoteRecord.from_chart_result(result, symbol))
            except FormattingError as exc:
                logger.warning("quote_formatting_failed", symbol=symbol, error=str(exc))
                return str(exc)
            except PAYLOAD_ERRORS as exc:
                logger.warning("quote_formatting_failed", symbol=symbol, error=str(exc))
                return f"Error formatting stock quote for {symbol}: {exc}"

        logger.info("quote_metadata_missing", symbol=symbol)
        try:
            return format_partial_quote(QuoteRecord.from_info_block(result, symbol))
        except (FormattingError, *PAYLOAD_ERRORS) as exc:
            logger.warning("basic_quote_formatting_failed", symbol=symbol, error=str(exc))
            return basic_quote_diagnostic(symbol)
