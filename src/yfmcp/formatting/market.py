"""Market index report rendering: one block per index, blank line between."""

from yfmcp.exceptions import FormattingError
from yfmcp.formatting.numbers import format_number, format_percent
from yfmcp.models import IndexRecord


def format_index(index: IndexRecord) -> str:
    return "\n".join(
        [
            index.display_name or index.symbol,
            f"Price: {format_number(index.price)}",
            f"Change: {format_number(index.change)} ({format_percent(index.change_percent)})",
            f"Previous Close: {format_number(index.previous_close)}",
            f"Day Range: {format_number(index.day_low)} - {format_number(index.day_high)}",
        ]
    )


def format_market_data(indices: list[IndexRecord]) -> str:
    """Join index blocks in the order given.

    Raises:
        FormattingError: If any block cannot be rendered.
    """
    try:
        return "\n\n".join(format_index(index) for index in indices)
    except (ArithmeticError, TypeError, ValueError) as exc:
        raise FormattingError(f"Error formatting market data: {exc}") from exc
