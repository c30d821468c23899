"""Custom exceptions for the Yahoo Finance tool server.

Pipelines raise only these types as hard failures. The tool boundary turns
any YahooFinanceError into an error payload; soft failures never raise.
"""


class YahooFinanceError(Exception):
    """Base exception for all tool server errors."""


class RateLimitExceeded(YahooFinanceError):
    """Raised when the per-minute or per-day request quota is used up."""


class InvalidArgument(YahooFinanceError):
    """Raised when a tool argument is missing, mistyped, or outside its allowed set."""


class FetchFailure(YahooFinanceError):
    """Raised when an upstream GET exhausts its retries (transport errors or 429s)."""


class UpstreamError(YahooFinanceError):
    """Raised when the upstream answers with a non-success status or an unreadable body."""

    def __init__(self, message: str, status_code: int | None = None, reason: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class FormattingError(YahooFinanceError):
    """Raised when a fetched payload cannot be shaped into a text report."""
