"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

HTTP is simulated with httpx.MockTransport: a handler function receives the
outgoing httpx.Request and returns an httpx.Response. Handlers can also raise
httpx transport exceptions to simulate an unreachable server.
"""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from comfy_offload.client import Client
from comfy_offload.core.config import get_app_config, get_settings

Handler = Callable[[httpx.Request], httpx.Response]


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _clear_config_cache():
    """Clear lru_cache between tests so each test gets a fresh load."""
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep COMFY_* and proxy variables from the developer's shell out of tests."""
    for name in ("COMFY_SERVER_ADDRESS", "COMFY_INPUT_DIR", "COMFY_OUTPUT_DIR"):
        monkeypatch.delenv(name, raising=False)
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY"):
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(name.lower(), raising=False)


# =============================================================================
# HTTP Fixtures
# =============================================================================


class RecordingHandler:
    """
    MockTransport handler that routes by (method, path) and records requests.

    Usage:
        handler = RecordingHandler({("GET", "/"): httpx.Response(200)})
        client = make_client(handler)
    """

    def __init__(self, routes: dict[tuple[str, str], Any] | None = None) -> None:
        self.routes = routes or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text="Not Found")
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(request)
        return route

    def json_body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content.decode("utf-8"))


def refuse(request: httpx.Request) -> httpx.Response:
    """Handler simulating a server with no listener."""
    raise httpx.ConnectError("[Errno 111] Connection refused", request=request)


@pytest.fixture
def refusing_handler() -> Handler:
    """Provide a handler that refuses every connection."""
    return refuse


@pytest.fixture
def recording_handler() -> type[RecordingHandler]:
    """Provide RecordingHandler class for building routed mock servers."""
    return RecordingHandler


@pytest.fixture
def make_client() -> Callable[..., Client]:
    """
    Build a Client whose requests go to a MockTransport handler.

    Usage:
        def test_x(make_client):
            client = make_client(lambda request: httpx.Response(200))
    """

    def _make(handler: Handler, address: str = "localhost", **kwargs: Any) -> Client:
        return Client(address, transport=httpx.MockTransport(handler), **kwargs)

    return _make
