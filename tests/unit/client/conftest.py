"""Fixtures for client-side store tests.

Hey future me - no sockets here. FakeApi is a tiny in-process stand-in for the server,
wired into RemoteClient through httpx.MockTransport. Tests poke `routes` to decide what
each endpoint answers and read `requests` to see what the store sent.
"""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest

from soundhaven.client import InMemoryNotificationProvider, Notifier, RemoteClient

BASE_URL = "http://testserver/api"

Route = Callable[[httpx.Request], httpx.Response]


class FakeApi:
    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Route] = {}
        self.requests: list[httpx.Request] = []
        self.on_request: Callable[[httpx.Request], None] | None = None

    def json(self, method: str, path: str, body: Any, status_code: int = 200) -> None:
        self.routes[(method, path)] = lambda _req: httpx.Response(status_code, json=body)

    def fail(self, method: str, path: str, exc: Exception) -> None:
        def raise_it(_req: httpx.Request) -> httpx.Response:
            raise exc

        self.routes[(method, path)] = raise_it

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.on_request is not None:
            self.on_request(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        return route(request)


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
async def remote(api: FakeApi) -> AsyncGenerator[RemoteClient, None]:
    client = RemoteClient(BASE_URL, transport=httpx.MockTransport(api))
    try:
        yield client
    finally:
        await client.close()


@pytest.fixture
def toasts() -> InMemoryNotificationProvider:
    return InMemoryNotificationProvider()


@pytest.fixture
def notifier(toasts: InMemoryNotificationProvider) -> Notifier:
    return Notifier([toasts])
