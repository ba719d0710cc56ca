"""Shared fixtures: loguru capture and an in-memory HTTP server."""

import asyncio

import httpx
import pytest
from loguru import logger

CONNECT_ERROR = "connect-error"


class MockServer:
    """
    Serves canned responses through httpx.MockTransport and records every request.

    Routes map a full URL to (status, body) where body is JSON data or raw text,
    or to CONNECT_ERROR to simulate an unreachable host.
    """

    def __init__(self, routes=None, fallback=None):
        self.routes = dict(routes or {})
        self.fallback = fallback
        self.requests = []

    def serve(self, url: str, body, status: int = 200) -> None:
        self.routes[url] = (status, body)

    def unreachable(self, url: str) -> None:
        self.routes[url] = CONNECT_ERROR

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url), self.fallback)

        if route is None:
            return httpx.Response(404, text="Not Found")
        if route == CONNECT_ERROR:
            raise httpx.ConnectError("Name or service not known", request=request)

        status, body = route
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def run(self, make_coro):
        """Run make_coro(client) to completion with a client bound to this server."""

        async def runner():
            async with httpx.AsyncClient(transport=httpx.MockTransport(self.handler)) as client:
                return await make_coro(client)

        return asyncio.run(runner())


@pytest.fixture
def server():
    return MockServer()


class LogCapture(list):
    """Loguru records captured during a test."""

    def at(self, level: str):
        return [record for record in self if record["level"].name == level]

    def messages(self, level: str):
        return [record["message"] for record in self.at(level)]


@pytest.fixture
def log_records():
    """Capture loguru records emitted during the test."""
    records = LogCapture()
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def minimal_document():
    """Smallest document that passes structural validation."""
    return {
        "personal": {"name": "A", "title": {"en": "B"}},
        "languages": {"default": "en", "available": ["en"]},
        "labels": {},
    }


@pytest.fixture
def no_resources_url(monkeypatch):
    monkeypatch.delenv("RESOURCES_URL", raising=False)
