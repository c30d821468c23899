"""Shared test fixtures for the Yahoo Finance tool server."""

import pytest

from yfmcp.config import AppSettings, ChartApiSettings, FetchSettings, RateLimitSettings

FIXED_NOW = 1_700_000_000


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with default quotas, three attempts and a 1s base delay."""
    return AppSettings(
        log_level="DEBUG",
        rate_limit=RateLimitSettings(per_minute=20, per_day=500),
        fetch=FetchSettings(max_retries=3, retry_base_delay=1.0, jitter=False),
        chart=ChartApiSettings(),
    )


@pytest.fixture
def aapl_chart_result() -> dict:
    """Chart result for AAPL with a full metadata block and one quote point."""
    return {
        "meta": {
            "currency": "USD",
            "symbol": "AAPL",
            "shortName": "Apple Inc.",
            "longName": "Apple Inc.",
            "regularMarketPrice": 189.84,
            "chartPreviousClose": 187.5,
            "regularMarketDayLow": 187.2,
            "regularMarketDayHigh": 190.32,
            "fiftyTwoWeekLow": 164.08,
            "fiftyTwoWeekHigh": 199.62,
            "regularMarketVolume": 53_000_000,
            "firstTradeDate": 345_479_400,
            "regularMarketTime": FIXED_NOW,
        },
        "timestamp": [FIXED_NOW - 60],
        "indicators": {
            "quote": [
                {
                    "open": [188.1],
                    "high": [190.32],
                    "low": [187.2],
                    "close": [189.84],
                    "volume": [53_000_000],
                }
            ],
            "adjclose": [{"adjclose": [189.84]}],
        },
    }


@pytest.fixture
def index_results() -> dict[str, dict]:
    """Chart results for the three default indices, keyed by symbol."""
    return {
        "^GSPC": {
            "meta": {
                "symbol": "^GSPC",
                "shortName": "S&P 500",
                "regularMarketPrice": 5000.25,
                "chartPreviousClose": 4950,
                "regularMarketDayLow": 4940.5,
                "regularMarketDayHigh": 5010,
            }
        },
        "^DJI": {
            "meta": {
                "symbol": "^DJI",
                "shortName": "Dow Jones Industrial Average",
                "regularMarketPrice": 38000,
                "chartPreviousClose": 38100,
                "regularMarketDayLow": 37900,
                "regularMarketDayHigh": 38150,
            }
        },
        "^IXIC": {
            "meta": {
                "symbol": "^IXIC",
                "longName": "NASDAQ Composite",
                "regularMarketPrice": 16000.5,
                "chartPreviousClose": 15800,
                "regularMarketDayLow": 15790,
                "regularMarketDayHigh": 16010,
            }
        },
    }
