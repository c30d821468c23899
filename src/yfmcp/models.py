"""Normalized records extracted from chart endpoint payloads.

All prices and volumes use Decimal. Upstream JSON floats are converted via
str() so that 189.84 stays 189.84 and never turns into a binary artefact.

Every field the upstream may omit is Optional. Each entity has exactly one
extraction classmethod; formatting code never touches raw payload dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from yfmcp.exceptions import FormattingError


def to_decimal(value: Any) -> Decimal | None:
    """Convert a raw JSON number to Decimal, or None if absent or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not result.is_finite():
        return None
    return result


def _series_value(series: dict, key: str, index: int) -> Decimal | None:
    """Return series[key][index] as Decimal, tolerating short or missing arrays."""
    values = series.get(key) or []
    if index >= len(values):
        return None
    return to_decimal(values[index])


def _first_quote_series(result: dict) -> dict:
    quotes = (result.get("indicators") or {}).get("quote") or []
    return quotes[0] if quotes and isinstance(quotes[0], dict) else {}


def _change(price: Decimal | None, previous_close: Decimal | None) -> Decimal | None:
    if price is None or previous_close is None:
        return None
    return price - previous_close


def _change_percent(
    price: Decimal | None, previous_close: Decimal | None
) -> Decimal | None:
    """Fractional change (0.0123 means 1.23%). None when a zero base makes it undefined."""
    change = _change(price, previous_close)
    if change is None or previous_close == 0:
        return None
    return change / previous_close


@dataclass
class QuoteRecord:
    """Snapshot quote for a single ticker.

    average_volume, market_cap, trailing_pe, eps and dividend_yield cannot be
    obtained from the chart endpoint and stay None on the metadata path.
    """

    symbol: str
    display_name: str | None = None
    price: Decimal | None = None
    previous_close: Decimal | None = None
    open: Decimal | None = None
    day_low: Decimal | None = None
    day_high: Decimal | None = None
    fifty_two_week_low: Decimal | None = None
    fifty_two_week_high: Decimal | None = None
    volume: Decimal | None = None
    average_volume: Decimal | None = None
    market_cap: Decimal | None = None
    trailing_pe: Decimal | None = None
    eps: Decimal | None = None
    dividend_yield: Decimal | None = None  # fraction, 0.005 == 0.50%
    is_partial: bool = False

    @property
    def change(self) -> Decimal | None:
        return _change(self.price, self.previous_close)

    @property
    def change_percent(self) -> Decimal | None:
        return _change_percent(self.price, self.previous_close)

    @classmethod
    def from_chart_result(cls, result: dict, symbol: str) -> QuoteRecord:
        """Build a full quote from a chart result carrying a ``meta`` block.

        Day range and volume prefer the metadata values and fall back to the
        first point of the quote series; open only exists in the series.
        """
        meta = result.get("meta")
        if not isinstance(meta, dict):
            raise FormattingError(f"Chart result for {symbol} has no metadata block")
        series = _first_quote_series(result)

        def meta_or_series(meta_key: str, series_key: str) -> Decimal | None:
            value = to_decimal(meta.get(meta_key))
            # falsy metadata (0 or missing) defers to the series point
            if not value:
                value = _series_value(series, series_key, 0)
            return value

        return cls(
            symbol=meta.get("symbol") or symbol,
            display_name=meta.get("shortName") or meta.get("longName") or symbol,
            price=to_decimal(meta.get("regularMarketPrice")),
            previous_close=to_decimal(meta.get("chartPreviousClose")),
            open=_series_value(series, "open", 0),
            day_low=meta_or_series("regularMarketDayLow", "low"),
            day_high=meta_or_series("regularMarketDayHigh", "high"),
            fifty_two_week_low=to_decimal(meta.get("fiftyTwoWeekLow")),
            fifty_two_week_high=to_decimal(meta.get("fiftyTwoWeekHigh")),
            volume=meta_or_series("regularMarketVolume", "volume"),
        )

    @classmethod
    def from_info_block(cls, result: dict, symbol: str) -> QuoteRecord:
        """Build a degraded quote when the ``meta`` block is unavailable.

        Reads the alternate ``instrumentInfo`` block (top level of the result,
        or nested in a partial meta) for name, price and previous close only.
        """
        meta = result.get("meta") if isinstance(result.get("meta"), dict) else {}
        info = result.get("instrumentInfo") or meta.get("instrumentInfo") or {}

        def info_or_meta(key: str) -> Decimal | None:
            value = to_decimal(info.get(key))
            return value if value is not None else to_decimal(meta.get(key))

        return cls(
            symbol=symbol,
            display_name=info.get("shortName") or info.get("longName") or symbol,
            price=info_or_meta("regularMarketPrice"),
            previous_close=info_or_meta("previousClose"),
            is_partial=True,
        )


@dataclass
class IndexRecord:
    """Snapshot of a market index, a subset of QuoteRecord."""

    symbol: str
    display_name: str
    price: Decimal | None = None
    previous_close: Decimal | None = None
    day_low: Decimal | None = None
    day_high: Decimal | None = None

    @property
    def change(self) -> Decimal | None:
        return _change(self.price, self.previous_close)

    @property
    def change_percent(self) -> Decimal | None:
        return _change_percent(self.price, self.previous_close)

    @classmethod
    def from_chart_result(cls, result: dict, symbol: str) -> IndexRecord:
        meta = result.get("meta")
        if not isinstance(meta, dict):
            raise FormattingError(f"Chart result for {symbol} has no metadata block")
        return cls(
            symbol=symbol,
            display_name=meta.get("shortName") or meta.get("longName") or symbol,
            price=to_decimal(meta.get("regularMarketPrice")),
            previous_close=to_decimal(meta.get("chartPreviousClose")),
            day_low=to_decimal(meta.get("regularMarketDayLow")),
            day_high=to_decimal(meta.get("regularMarketDayHigh")),
        )


@dataclass
class HistoryPoint:
    """One OHLCV bucket. timestamp is Unix seconds."""

    timestamp: int
    open: Decimal | None = None
    high: Decimal | None = None
    low: Decimal | None = None
    close: Decimal | None = None
    volume: Decimal | None = None


@dataclass
class HistorySeries:
    """Chronological OHLCV series for one ticker plus its trading-period bounds."""

    symbol: str
    currency: str = "USD"
    first_trade_date: int | None = None  # Unix seconds
    last_trade_date: int | None = None  # Unix seconds
    points: list[HistoryPoint] = field(default_factory=list)

    @classmethod
    def from_chart_result(cls, result: dict, symbol: str) -> HistorySeries:
        """Align the parallel timestamp/open/high/low/close/volume arrays by index."""
        meta = result.get("meta") if isinstance(result.get("meta"), dict) else {}
        series = _first_quote_series(result)
        timestamps = result.get("timestamp") or []

        points = [
            HistoryPoint(
                timestamp=int(ts),
                open=_series_value(series, "open", i),
                high=_series_value(series, "high", i),
                low=_series_value(series, "low", i),
                close=_series_value(series, "close", i),
                volume=_series_value(series, "volume", i),
            )
            for i, ts in enumerate(timestamps)
        ]

        return cls(
            symbol=symbol,
            currency=meta.get("currency") or "USD",
            first_trade_date=meta.get("firstTradeDate"),
            last_trade_date=meta.get("regularMarketTime"),
            points=points,
        )
