from __future__ import annotations

from collections.abc import AsyncIterator
from collections.abc import Callable
from pathlib import Path
from typing import Union

import httpx
import pytest
from prometheus_client import CollectorRegistry

from osuapi.client import Osu

FIXTURES = Path(__file__).parent / "fixtures"

API_KEY = "test-api-key"


def load_fixture(name: str) -> bytes:
    return (FIXTURES / name).read_bytes()


Handler = Callable[[httpx.Request], httpx.Response]


class FakeOsuApi:
    """Serves canned osu!api responses by endpoint path and records every request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, Union[Handler, tuple[int, bytes]]] = {}

    def route(
        self,
        path: str,
        content: Union[bytes, str] = b"[]",
        *,
        status: int = 200,
    ) -> None:
        if isinstance(content, str):
            content = content.encode()

        self._routes[path] = (status, content)

    def route_handler(self, path: str, handler: Handler) -> None:
        self._routes[path] = handler

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/" + path)]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        route = self._routes.get(request.url.path.rsplit("/", 1)[-1])
        if route is None:
            return httpx.Response(404, content=b'{"error": "unknown endpoint"}')

        if callable(route):
            return route(request)

        status, content = route
        return httpx.Response(status, content=content)


@pytest.fixture
def api() -> FakeOsuApi:
    return FakeOsuApi()


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
async def osu(api: FakeOsuApi, registry: CollectorRegistry) -> AsyncIterator[Osu]:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(api.handler))

    client = Osu(
        API_KEY,
        base_url="https://osu.test/api/",
        rate_limit=100,
        per_seconds=1.0,
        http_client=http_client,
        registry=registry,
    )
    yield client

    await http_client.aclose()
