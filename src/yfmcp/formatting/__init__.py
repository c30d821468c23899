"""Text report rendering for quotes, market indices and price history."""

from yfmcp.formatting.history import format_history, sample_points
from yfmcp.formatting.market import format_market_data
from yfmcp.formatting.quote import format_partial_quote, format_quote

__all__ = [
    "format_history",
    "format_market_data",
    "format_partial_quote",
    "format_quote",
    "sample_points",
]
