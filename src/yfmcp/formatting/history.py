"""Historical OHLCV report rendering.

The table is a stride sample of the full series: every
max(1, len(points) // max_rows)-th point starting at index 0. Skipped points
are dropped, not aggregated. The price-change summary always compares the
first and last points of the full series, whichever rows were printed.
"""

from yfmcp.exceptions import FormattingError
from yfmcp.formatting.numbers import (
    NOT_AVAILABLE,
    format_date,
    format_fixed,
    format_number,
    format_percent,
)
from yfmcp.models import HistoryPoint, HistorySeries

DEFAULT_MAX_ROWS = 10

TABLE_HEADER = "Date       | Open     | High     | Low      | Close    | Volume"
TABLE_RULE = "-----------|----------|----------|----------|----------|------------"


def sample_points(points: list[HistoryPoint], max_rows: int = DEFAULT_MAX_ROWS) -> list[HistoryPoint]:
    """Return the stride sample of points shown in the table."""
    step = max(1, len(points) // max_rows)
    return points[::step]


def _price_cell(value) -> str:
    text = format_fixed(value)
    return f"${text:<8}" if value is not None else f"{NOT_AVAILABLE:<9}"


def _format_row(point: HistoryPoint) -> str:
    cells = [
        f"{format_date(point.timestamp):<11}",
        _price_cell(point.open),
        _price_cell(point.high),
        _price_cell(point.low),
        _price_cell(point.close),
        format_number(point.volume),
    ]
    return " | ".join(cells)


def _price_change_line(points: list[HistoryPoint]) -> str | None:
    if not points:
        return None
    first_close = points[0].close
    last_close = points[-1].close
    if first_close is None or last_close is None:
        return None
    change = last_close - first_close
    # a zero first close leaves the percentage undefined
    fraction = change / first_close if first_close != 0 else None
    return f"Price Change: ${format_fixed(change)} ({format_percent(fraction)})"


def format_history(
    series: HistorySeries,
    period: str,
    interval: str,
    max_rows: int = DEFAULT_MAX_ROWS,
) -> str:
    """Render header, sampled OHLCV table and price-change summary.

    Raises:
        FormattingError: If a timestamp or value cannot be rendered
            (e.g. a timestamp outside the platform date range).
    """
    try:
        lines = [
            f"Historical data for {series.symbol} ({period}, {interval} intervals)",
            f"Currency: {series.currency}",
        ]
        if series.first_trade_date and series.last_trade_date:
            lines.append(
                f"Trading Period: {format_date(series.first_trade_date)} "
                f"to {format_date(series.last_trade_date)}"
            )
        lines.append("")

        lines.append(TABLE_HEADER)
        lines.append(TABLE_RULE)
        lines.extend(_format_row(point) for point in sample_points(series.points, max_rows))

        summary = _price_change_line(series.points)
        if summary is not None:
            lines.append("")
            lines.append(summary)
    except (ArithmeticError, TypeError, ValueError, OverflowError, OSError) as exc:
        raise FormattingError(f"Error formatting stock history: {exc}") from exc

    return "\n".join(lines)
