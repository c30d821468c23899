"""Tests for historical OHLCV report rendering and stride sampling."""

from decimal import Decimal

import pytest

from yfmcp.exceptions import FormattingError
from yfmcp.formatting.history import TABLE_HEADER, TABLE_RULE, format_history, sample_points
from yfmcp.formatting.numbers import format_date
from yfmcp.models import HistoryPoint, HistorySeries

START = 1_700_000_000
DAY = 86_400


def _series(count: int, **kwargs) -> HistorySeries:
    """Series whose close at index i is 100 + i; other OHLC fields absent."""
    points = [
        HistoryPoint(timestamp=START + i * DAY, close=Decimal(100 + i), volume=Decimal(1000 * i))
        for i in range(count)
    ]
    return HistorySeries(symbol="AAPL", points=points, **kwargs)


def _table_rows(report: str) -> list[str]:
    lines = report.splitlines()
    start = lines.index(TABLE_RULE) + 1
    rows = []
    for line in lines[start:]:
        if not line:
            break
        rows.append(line)
    return rows


class TestSamplePoints:
    """Stride sampling of the full series."""

    def test_hundred_points_stride_ten(self) -> None:
        points = _series(100).points
        sampled = sample_points(points, max_rows=10)

        assert len(sampled) == 10
        assert [p.close for p in sampled] == [Decimal(100 + i) for i in range(0, 100, 10)]

    def test_short_series_shown_in_full(self) -> None:
        points = _series(7).points
        assert sample_points(points) == points

    def test_stride_formula_can_exceed_max_rows(self) -> None:
        """25 points -> stride 2 -> 13 rows (indices 0, 2, ..., 24)."""
        sampled = sample_points(_series(25).points, max_rows=10)
        assert len(sampled) == 13

    def test_empty_series(self) -> None:
        assert sample_points([]) == []


class TestFormatHistory:
    """Header, table and summary."""

    def test_hundred_points_render_ten_rows(self) -> None:
        report = format_history(_series(100), "3mo", "1d")

        rows = _table_rows(report)
        assert len(rows) == 10
        assert rows[0].startswith(format_date(START))
        assert rows[1].startswith(format_date(START + 10 * DAY))

    def test_summary_uses_full_series_endpoints(self) -> None:
        report = format_history(_series(100), "3mo", "1d")

        # point[0].close = 100, point[99].close = 199 (199 is never a table row)
        assert report.splitlines()[-1] == "Price Change: $99.00 (99.00%)"
        assert "$199.00" not in report

    def test_header_with_trading_period(self) -> None:
        series = _series(3, currency="EUR", first_trade_date=START, last_trade_date=START + DAY)
        lines = format_history(series, "1mo", "1wk").splitlines()

        assert lines[0] == "Historical data for AAPL (1mo, 1wk intervals)"
        assert lines[1] == "Currency: EUR"
        assert lines[2] == f"Trading Period: {format_date(START)} to {format_date(START + DAY)}"
        assert lines[3] == ""
        assert lines[4] == TABLE_HEADER

    def test_header_without_trading_period(self) -> None:
        lines = format_history(_series(3), "1mo", "1d").splitlines()

        assert lines[1] == "Currency: USD"
        assert lines[2] == ""
        assert lines[3] == TABLE_HEADER

    def test_missing_cells_render_not_available(self) -> None:
        series = HistorySeries(
            symbol="AAPL",
            points=[
                HistoryPoint(
                    timestamp=START,
                    open=Decimal("188.1"),
                    high=Decimal("190.325"),
                    low=None,
                    close=Decimal("189.84"),
                    volume=None,
                )
            ],
        )
        row = _table_rows(format_history(series, "1d", "1m"))[0]

        cells = [cell.strip() for cell in row.split(" | ")]
        assert cells[1:] == ["$188.10", "$190.33", "N/A", "$189.84", "N/A"]

    def test_volume_is_grouped(self) -> None:
        series = HistorySeries(
            symbol="AAPL",
            points=[HistoryPoint(timestamp=START, close=Decimal("1"), volume=Decimal("53000000"))],
        )
        row = _table_rows(format_history(series, "1d", "1d"))[0]
        assert row.endswith("| 53,000,000")

    def test_no_summary_when_endpoint_close_missing(self) -> None:
        series = _series(5)
        series.points[-1].close = None

        report = format_history(series, "5d", "1d")

        assert "Price Change" not in report

    def test_empty_series_renders_header_only(self) -> None:
        report = format_history(HistorySeries(symbol="AAPL"), "1d", "1m")

        assert report.endswith(TABLE_RULE)
        assert "Price Change" not in report

    def test_zero_first_close_keeps_table(self) -> None:
        series = _series(3)
        series.points[0].close = Decimal("0")

        report = format_history(series, "5d", "1d")

        assert len(_table_rows(report)) == 3
        assert report.splitlines()[-1] == "Price Change: $102.00 (N/A)"

    def test_unrenderable_timestamp_raises_formatting_error(self) -> None:
        series = _series(2)
        series.points[1].timestamp = 10**20

        with pytest.raises(FormattingError, match="Error formatting stock history"):
            format_history(series, "5d", "1d")
