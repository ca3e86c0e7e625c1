"""Shared pytest fixtures for conduit-bff tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from conduit_bff.clients.registry import ServiceClients
from conduit_bff.config import Settings

Route = httpx.Response | Callable[[httpx.Request], httpx.Response] | Exception


class FakeDownstream:
    """
    In-memory stand-in for every downstream service.

    Answers requests from a route table keyed by ``(method, full URL)`` and
    records every request it sees. Unknown routes answer 404.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Route] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        url: str,
        json_body: Any = None,
        status: int = 200,
        *,
        response: Route | None = None,
    ) -> None:
        if response is None:
            response = httpx.Response(status, json=json_body)
        self.routes[(method, url)] = response

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, str(request.url)))
        if route is None:
            return httpx.Response(404)
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(request)
        # Fresh copy per call so a route can answer any number of requests
        return httpx.Response(route.status_code, headers=route.headers, content=route.content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def calls(self, method: str, url: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and str(r.url) == url]

    def body(self, request: httpx.Request) -> Any:
        return json.loads(request.content) if request.content else None


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        app_env="development",
        service_name="test-bff",
        service_version="9.9.9",
        request_timeout=1000,
    )


@pytest.fixture
def downstream() -> FakeDownstream:
    return FakeDownstream()


@pytest.fixture
def clients(settings: Settings, downstream: FakeDownstream) -> ServiceClients:
    """Service clients wired to the fake downstream."""
    return ServiceClients.from_settings(settings, transport=downstream.transport)
