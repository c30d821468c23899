"""Quote report rendering (full and degraded)."""

from yfmcp.exceptions import FormattingError
from yfmcp.formatting.numbers import (
    NOT_AVAILABLE,
    format_fixed,
    format_money,
    format_number,
    format_percent,
)
from yfmcp.models import QuoteRecord

PARTIAL_QUOTE_NOTE = (
    "Note: Full quote data is unavailable. Showing limited information from chart data."
)


def format_quote(quote: QuoteRecord) -> str:
    """Render the fixed fourteen-line quote report.

    Raises:
        FormattingError: If a field cannot be rendered.
    """
    try:
        lines = [
            f"Symbol: {quote.symbol}",
            f"Name: {quote.display_name or NOT_AVAILABLE}",
            f"Price: {format_money(quote.price)}",
            f"Change: {format_money(quote.change)} ({format_percent(quote.change_percent)})",
            f"Previous Close: {format_money(quote.previous_close)}",
            f"Open: {format_money(quote.open)}",
            f"Day Range: {format_money(quote.day_low)} - {format_money(quote.day_high)}",
            "52-Week Range: "
            f"{format_money(quote.fifty_two_week_low)} - {format_money(quote.fifty_two_week_high)}",
            f"Volume: {format_number(quote.volume)}",
            f"Avg. Volume: {format_number(quote.average_volume)}",
            f"Market Cap: {format_money(quote.market_cap)}",
            f"P/E Ratio: {format_number(quote.trailing_pe)}",
            f"EPS: {format_money(quote.eps)}",
            f"Dividend Yield: {format_percent(quote.dividend_yield)}",
        ]
    except (ArithmeticError, TypeError, ValueError) as exc:
        raise FormattingError(f"Error formatting stock quote for {quote.symbol}: {exc}") from exc
    return "\n".join(lines)


def format_partial_quote(quote: QuoteRecord) -> str:
    """Render the short quote used when only the info block is available."""
    try:
        change = quote.change
        change_text = f"${format_fixed(change)}" if change is not None else NOT_AVAILABLE
        lines = [
            f"Symbol: {quote.symbol}",
            f"Name: {quote.display_name or quote.symbol}",
            f"Price: {format_money(quote.price)}",
            f"Change: {change_text} ({format_percent(quote.change_percent)})",
            f"Previous Close: {format_money(quote.previous_close)}",
            "",
            PARTIAL_QUOTE_NOTE,
        ]
    except (ArithmeticError, TypeError, ValueError) as exc:
        raise FormattingError(f"Error formatting basic quote for {quote.symbol}: {exc}") from exc
    return "\n".join(lines)
