"""Market overview pipeline: one snapshot per index, fetched strictly in sequence.

Each index goes through the rate limiter on its own. Running out of quota
aborts the batch; any other per-index failure is logged and that index is
skipped, so the report keeps fetch order minus the failures.
"""

from __future__ import annotations

from yfmcp.exceptions import FormattingError, RateLimitExceeded, YahooFinanceError
from yfmcp.formatting.market import format_market_data
from yfmcp.logging import get_logger
from yfmcp.models import IndexRecord
from yfmcp.pipelines.base import PAYLOAD_ERRORS, ChartPipeline
from yfmcp.upstream.chart import decode_payload, first_result

logger = get_logger(__name__)

DEFAULT_INDICES: tuple[str, ...] = ("^GSPC", "^DJI", "^IXIC")

MARKET_DATA_UNAVAILABLE = (
    "Unable to retrieve market data. Yahoo Finance data may be temporarily unavailable."
)


class MarketDataPipeline(ChartPipeline):
    """Fetches and renders snapshot blocks for a list of indices."""

    async def run(self, indices: list[str] | None = None) -> str:
        """Return one block per index that could be fetched.

        Args:
            indices: Index tickers; None or empty means DEFAULT_INDICES.

        Raises:
            RateLimitExceeded: Quota used up part way through the batch.
        """
        symbols = list(indices) if indices else list(DEFAULT_INDICES)
        records: list[IndexRecord] = []

        for symbol in symbols:
            try:
                record = await self.fetch_index(symbol)
            except RateLimitExceeded:
                raise
            except (YahooFinanceError, *PAYLOAD_ERRORS) as exc:
                logger.warning("index_fetch_failed", symbol=symbol, error=str(exc))
                continue
            if record is not None:
                records.append(record)

        logger.info("market_data_fetched", requested=len(symbols), retrieved=len(records))

        if not records:
            return MARKET_DATA_UNAVAILABLE

        try:
            return format_market_data(records)
        except FormattingError as exc:
            logger.warning("market_data_formatting_failed", error=str(exc))
            return str(exc)

    async def fetch_index(self, symbol: str) -> IndexRecord | None:
        """Fetch one index snapshot. None when the upstream has nothing usable."""
        response = await self._fetch_snapshot(symbol)

        if not response.is_success:
            logger.warning("index_unavailable", symbol=symbol, status=response.status_code)
            return None

        result = first_result(decode_payload(response))
        if result is None:
            logger.warning("index_no_result", symbol=symbol)
            return None

        return IndexRecord.from_chart_result(result, symbol)
