"""Entry point for the Yahoo Finance MCP tool server.

Component wiring order (in build_components):
1. AppSettings (configuration)
2. Logging setup
3. RateLimiter (one per process, shared by every pipeline)
4. ResilientFetcher (over a shared httpx.AsyncClient)
5. Pipelines (quote, market data, history)
6. ToolBoundary (validation and dispatch)
7. MCP server on stdio
"""

import asyncio
from typing import Any

import httpx

from yfmcp.config import AppSettings
from yfmcp.logging import get_logger, setup_logging
from yfmcp.pipelines.history import StockHistoryPipeline
from yfmcp.pipelines.market import MarketDataPipeline
from yfmcp.pipelines.quote import StockQuotePipeline
from yfmcp.server import build_server, serve_stdio
from yfmcp.tools import ToolBoundary
from yfmcp.upstream.fetcher import ResilientFetcher
from yfmcp.upstream.rate_limiter import RateLimiter


def build_components(settings: AppSettings, client: httpx.AsyncClient) -> dict[str, Any]:
    """Build the dependency graph on top of an HTTP client owned by the caller.

    Args:
        settings: Application-wide settings.
        client: Shared async HTTP client; the caller closes it.

    Returns:
        Dict mapping component names to instances.
    """
    rate_limiter = RateLimiter(settings.rate_limit)
    fetcher = ResilientFetcher(client, settings.fetch)

    quote = StockQuotePipeline(rate_limiter, fetcher, settings.chart)
    market = MarketDataPipeline(rate_limiter, fetcher, settings.chart)
    history = StockHistoryPipeline(rate_limiter, fetcher, settings.chart)

    boundary = ToolBoundary(quote=quote, market=market, history=history)

    return {
        "rate_limiter": rate_limiter,
        "fetcher": fetcher,
        "quote_pipeline": quote,
        "market_pipeline": market,
        "history_pipeline": history,
        "tool_boundary": boundary,
    }


async def run() -> None:
    """Run the tool server on stdio until the client disconnects."""
    settings = AppSettings()

    setup_logging(settings.log_level)
    logger = get_logger("yfmcp.main")

    async with httpx.AsyncClient(follow_redirects=True) as client:
        components = build_components(settings, client)
        server = build_server(components["tool_boundary"], settings)

        logger.info(
            "yahoo_finance_mcp_starting",
            version=settings.server_version,
            per_minute=settings.rate_limit.per_minute,
            per_day=settings.rate_limit.per_day,
            max_retries=settings.fetch.max_retries,
        )
        await serve_stdio(server)

    logger.info("yahoo_finance_mcp_stopped")


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
