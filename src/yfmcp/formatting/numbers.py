"""Number rendering shared by all reports.

Grouped numbers follow en-US locale display: thousands separators and at most
three fraction digits, trailing zeros dropped. Halves round away from zero.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

NOT_AVAILABLE = "N/A"

_THREE_PLACES = Decimal("0.001")
_TWO_PLACES = Decimal("0.01")


def format_number(value: Decimal | None) -> str:
    """1234567.891 -> "1,234,567.891", 189.5 -> "189.5", None -> "N/A"."""
    if value is None:
        return NOT_AVAILABLE
    text = f"{value.quantize(_THREE_PLACES, rounding=ROUND_HALF_UP):,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_fixed(value: Decimal | None) -> str:
    """Two decimals, no grouping: 1234.5 -> "1234.50"."""
    if value is None:
        return NOT_AVAILABLE
    return f"{value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP):f}"


def format_money(value: Decimal | None) -> str:
    """Dollar-prefixed grouped number, or "N/A" when absent."""
    if value is None:
        return NOT_AVAILABLE
    return f"${format_number(value)}"


def format_percent(fraction: Decimal | None) -> str:
    """Render a fraction as a percentage: 0.01234 -> "1.23%"."""
    if fraction is None:
        return NOT_AVAILABLE
    return f"{format_fixed(fraction * 100)}%"


def format_date(timestamp: int) -> str:
    """Unix seconds to a local M/D/YYYY date."""
    moment = datetime.fromtimestamp(timestamp)
    return f"{moment.month}/{moment.day}/{moment.year}"
