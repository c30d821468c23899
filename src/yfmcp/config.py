"""Configuration system using pydantic-settings with environment variable loading."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RateLimitSettings(BaseSettings):
    """Fixed-window request quotas applied before every upstream call."""

    model_config = SettingsConfigDict(env_prefix="RATE_LIMIT_")

    per_minute: int = Field(default=20, gt=0)
    per_day: int = Field(default=500, gt=0)
    minute_window_seconds: float = 60.0
    day_window_seconds: float = 86_400.0


class FetchSettings(BaseSettings):
    """Outbound HTTP retry behavior.

    Delays between attempts are retry_base_delay * 2**attempt (1s, 2s, 4s).
    All fields configurable via FETCH_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="FETCH_")

    max_retries: int = Field(default=3, ge=1)
    retry_base_delay: float = Field(default=1.0, ge=0)
    timeout_seconds: float = 5.0  # per attempt, same as the httpx default
    jitter: bool = False  # opt-in: add up to 10% random extra delay


class ChartApiSettings(BaseSettings):
    """Upstream chart endpoint location and report sizing."""

    model_config = SettingsConfigDict(env_prefix="CHART_")

    base_url: str = "https://query2.finance.yahoo.com/v8/finance/chart"
    snapshot_window_seconds: int = 60
    history_max_rows: int = Field(default=10, gt=0)


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    server_name: str = "yahoofinance-mcp"
    server_version: str = "0.1.0"
    rate_limit: RateLimitSettings = RateLimitSettings()
    fetch: FetchSettings = FetchSettings()
    chart: ChartApiSettings = ChartApiSettings()
