"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from jsr_mcp.client import JSRClient
from jsr_mcp.config import JSRConfig, create_jsr_config
from jsr_mcp.server import MCPServer, build_server

Responder = Callable[[httpx.Request], httpx.Response]


class MockJSR:
    """Stand-in for the JSR API and registry that records every request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Responder] = {}

    def add(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        status_code: int = 200,
        text: str | None = None,
    ) -> None:
        """Register a canned response for ``method`` + ``path``."""

        def responder(_: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status_code, text=text)
            if json is None:
                return httpx.Response(status_code)
            return httpx.Response(status_code, json=json)

        self._routes[(method, path)] = responder

    def add_handler(self, method: str, path: str, handler: Responder) -> None:
        """Register a custom responder, e.g. one that raises a network error."""
        self._routes[(method, path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self._routes.get((request.method, request.url.path))
        if responder is None:
            return httpx.Response(
                404, json={"code": "notFound", "message": "Resource not found"}
            )
        return responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


@pytest.fixture()
def anyio_backend() -> str:
    """Run async tests on asyncio only."""
    return "asyncio"


@pytest.fixture()
def jsr_api() -> MockJSR:
    """Provide an in-memory JSR service."""
    return MockJSR()


@pytest.fixture()
def config() -> JSRConfig:
    """Authenticated configuration pointing at the default endpoints."""
    return create_jsr_config("https://api.jsr.io", "https://jsr.io", "test-token")


@pytest.fixture()
def anonymous_config() -> JSRConfig:
    """Configuration without an API token."""
    return create_jsr_config("https://api.jsr.io", "https://jsr.io")


@pytest.fixture()
def client(config: JSRConfig, jsr_api: MockJSR) -> JSRClient:
    """Client wired to the mock service."""
    return JSRClient(config, transport=jsr_api.transport)


@pytest.fixture()
def server(config: JSRConfig, jsr_api: MockJSR) -> MCPServer:
    """Dispatcher with the full tool catalog wired to the mock service."""
    return build_server(config, transport=jsr_api.transport)


@pytest.fixture()
def sample_package() -> dict[str, Any]:
    """A package body as returned by the JSR API."""
    return {
        "scope": "std",
        "name": "assert",
        "description": "Common assertion functions",
        "runtimeCompat": {"browser": True, "deno": True, "node": True},
        "createdAt": "2024-03-01T00:00:00Z",
        "updatedAt": "2024-06-01T00:00:00Z",
        "githubRepository": {"owner": "denoland", "name": "std"},
        "score": 100,
    }
