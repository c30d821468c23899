"""Tool pipelines -- rate limit, fetch, extract, format."""

from yfmcp.pipelines.base import ChartPipeline
from yfmcp.pipelines.history import StockHistoryPipeline
from yfmcp.pipelines.market import DEFAULT_INDICES, MarketDataPipeline
from yfmcp.pipelines.quote import StockQuotePipeline

__all__ = [
    "ChartPipeline",
    "DEFAULT_INDICES",
    "MarketDataPipeline",
    "StockHistoryPipeline",
    "StockQuotePipeline",
]
