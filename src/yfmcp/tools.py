"""Tool boundary: definitions, argument validation and dispatch to pipelines.

Protocol-agnostic. The MCP server in yfmcp.server advertises TOOL_DEFINITIONS
and forwards every call to ToolBoundary.call, which always returns a
ToolResult and never raises.

Hard failures (any YahooFinanceError) become ``Error: <message>`` with
is_error set. Soft failures are ordinary text produced by the pipelines.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from yfmcp.exceptions import InvalidArgument, YahooFinanceError
from yfmcp.logging import get_logger
from yfmcp.pipelines.history import DEFAULT_INTERVAL, DEFAULT_PERIOD, StockHistoryPipeline
from yfmcp.pipelines.market import DEFAULT_INDICES, MarketDataPipeline
from yfmcp.pipelines.quote import StockQuotePipeline
from yfmcp.upstream.chart import VALID_INTERVALS, VALID_PERIODS

logger = get_logger(__name__)

STOCK_QUOTE_TOOL = "yahoo_stock_quote"
MARKET_DATA_TOOL = "yahoo_market_data"
STOCK_HISTORY_TOOL = "yahoo_stock_history"

_SYMBOL_PROPERTY = {
    "type": "string",
    "description": "Stock ticker symbol (e.g., AAPL, MSFT, TSLA)",
}

TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": STOCK_QUOTE_TOOL,
        "description": (
            "Get current stock quote information from Yahoo Finance. "
            "Returns detailed information about a stock including current price, "
            "day range, 52-week range, market cap, volume, P/E ratio, etc. "
            "Use this for getting the latest stock price and key metrics."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {"symbol": _SYMBOL_PROPERTY},
            "required": ["symbol"],
        },
    },
    {
        "name": MARKET_DATA_TOOL,
        "description": (
            "Get current market data from Yahoo Finance. "
            "Returns information about major market indices (like S&P 500, NASDAQ, Dow Jones). "
            "Use this for broad market overview and current market sentiment."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "indices": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": (
                        "List of index symbols to fetch "
                        "(e.g., ^GSPC for S&P 500, ^DJI for Dow Jones)"
                    ),
                    "default": list(DEFAULT_INDICES),
                },
            },
            "required": [],
        },
    },
    {
        "name": STOCK_HISTORY_TOOL,
        "description": (
            "Get historical stock data from Yahoo Finance. "
            "Returns price and volume data for a specified time period. "
            "Useful for charting, trend analysis, and evaluating stock performance over time."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "symbol": _SYMBOL_PROPERTY,
                "period": {
                    "type": "string",
                    "description": f"Time period ({', '.join(VALID_PERIODS)})",
                    "default": DEFAULT_PERIOD,
                },
                "interval": {
                    "type": "string",
                    "description": f"Data interval ({', '.join(VALID_INTERVALS)})",
                    "default": DEFAULT_INTERVAL,
                },
            },
            "required": ["symbol"],
        },
    },
]


@dataclass
class ToolResult:
    """Text payload returned to the protocol layer."""

    text: str
    is_error: bool = False


def _require_symbol(tool: str, arguments: dict[str, Any]) -> str:
    symbol = arguments.get("symbol")
    if not isinstance(symbol, str) or not symbol.strip():
        raise InvalidArgument(f"Invalid arguments for {tool}")
    return symbol


def _optional_string(tool: str, arguments: dict[str, Any], key: str, default: str) -> str:
    value = arguments.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise InvalidArgument(f"Invalid arguments for {tool}")
    return value


def _optional_indices(tool: str, arguments: dict[str, Any]) -> list[str] | None:
    indices = arguments.get("indices")
    if indices is None:
        return None
    if not isinstance(indices, list) or not all(isinstance(i, str) for i in indices):
        raise InvalidArgument(f"Invalid arguments for {tool}")
    return indices


class ToolBoundary:
    """Routes named tool calls to their pipelines.

    Args:
        quote: Pipeline behind yahoo_stock_quote.
        market: Pipeline behind yahoo_market_data.
        history: Pipeline behind yahoo_stock_history.
    """

    def __init__(
        self,
        quote: StockQuotePipeline,
        market: MarketDataPipeline,
        history: StockHistoryPipeline,
    ) -> None:
        self._quote = quote
        self._market = market
        self._history = history

    @staticmethod
    def list_tools() -> list[dict[str, Any]]:
        return TOOL_DEFINITIONS

    async def call(self, name: str, arguments: dict[str, Any] | None) -> ToolResult:
        """Run a tool by name and wrap the outcome in a ToolResult."""
        arguments = arguments or {}
        logger.info("tool_called", tool=name)

        try:
            if name == STOCK_QUOTE_TOOL:
                text = await self._quote.run(_require_symbol(name, arguments))
            elif name == MARKET_DATA_TOOL:
                text = await self._market.run(_optional_indices(name, arguments))
            elif name == STOCK_HISTORY_TOOL:
                text = await self._history.run(
                    _require_symbol(name, arguments),
                    period=_optional_string(name, arguments, "period", DEFAULT_PERIOD),
                    interval=_optional_string(name, arguments, "interval", DEFAULT_INTERVAL),
                )
            else:
                logger.warning("unknown_tool", tool=name)
                return ToolResult(text=f"Unknown tool: {name}", is_error=True)
        except YahooFinanceError as exc:
            logger.warning("tool_failed", tool=name, error=str(exc), error_type=type(exc).__name__)
            return ToolResult(text=f"Error: {exc}", is_error=True)
        except Exception as exc:
            logger.error("tool_crashed", tool=name, exc_info=True)
            return ToolResult(text=f"Error: {exc}", is_error=True)

        return ToolResult(text=text)
