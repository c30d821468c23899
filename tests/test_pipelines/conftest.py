"""Fake chart endpoint and pipeline builders for pipeline tests."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from yfmcp.config import AppSettings
from yfmcp.pipelines.base import ChartPipeline
from yfmcp.upstream.fetcher import ResilientFetcher
from yfmcp.upstream.rate_limiter import RateLimiter

FIXED_NOW = 1_700_000_000


class ChartServer:
    """MockTransport handler answering per symbol.

    Route values:
        int -> empty response with that status
        dict -> 200 with {"chart": {"result": [value]}}
        None -> 200 with an empty result list
        bytes -> 200 with that raw body
        Exception -> raised as a transport failure
    Unknown symbols get a 404.
    """

    def __init__(self, routes: dict[str, Any]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    @property
    def symbols(self) -> list[str]:
        return [r.url.path.rsplit("/", 1)[-1] for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        symbol = request.url.path.rsplit("/", 1)[-1]
        outcome = self.routes.get(symbol, 404)

        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, int):
            return httpx.Response(outcome)
        if isinstance(outcome, bytes):
            return httpx.Response(200, content=outcome)
        if outcome is None:
            return httpx.Response(200, json={"chart": {"result": [], "error": None}})
        return httpx.Response(200, json={"chart": {"result": [outcome], "error": None}})


@pytest.fixture
def rate_limiter(mock_settings: AppSettings) -> RateLimiter:
    return RateLimiter(mock_settings.rate_limit)


@pytest.fixture
def make_pipeline(
    mock_settings: AppSettings, rate_limiter: RateLimiter
) -> Callable[..., ChartPipeline]:
    """Return a builder: make_pipeline(PipelineClass, ChartServer) -> pipeline."""

    def _make(pipeline_cls: type[ChartPipeline], server: ChartServer) -> ChartPipeline:
        client = httpx.AsyncClient(transport=httpx.MockTransport(server))
        fetcher = ResilientFetcher(client, mock_settings.fetch)
        return pipeline_cls(rate_limiter, fetcher, mock_settings.chart, clock=lambda: FIXED_NOW)

    return _make


@pytest.fixture
def chart_server() -> type[ChartServer]:
    """The fake endpoint class; call it with a routes dict."""
    return ChartServer
