"""tests/conftest.py

Pytest configuration and shared fixtures for the reasoning-bridge test suite.
"""

from __future__ import annotations

# Standard Library
import json
from typing import Any

# Third-Party Libraries
import httpx
import pytest

# Local Modules
from reasoning_bridge.dispatcher import Dispatcher
from reasoning_bridge.search import ExaSearchClient
from reasoning_bridge.session import BridgeSession
from reasoning_bridge.tools import build_registry


def exa_payload(query: str) -> dict[str, Any]:
    """Build a fake Exa response whose content identifies the query."""
    return {
        "requestId": f"req-{query}",
        "autopromptString": query,
        "results": [
            {
                "title": f"About {query}",
                "url": f"https://example.com/{query.replace(' ', '-')}",
                "text": f"Full text for {query}.",
            }
        ],
    }


class FakeExa:
    """Stand-in for the Exa HTTP API, served through ``httpx.MockTransport``.

    Every request is recorded. By default each search answers with
    ``exa_payload(query)``; set ``status`` / ``body`` to force an error, or
    ``raises`` to simulate a transport failure.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status: int = 200
        self.body: Any = None
        self.raises: Exception | None = None

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raises is not None:
            raise self.raises
        if self.body is not None:
            return httpx.Response(self.status, json=self.body)
        query = json.loads(request.content)["query"]
        return httpx.Response(self.status, json=exa_payload(query))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def fake_exa() -> FakeExa:
    """A fresh fake Exa backend."""
    return FakeExa()


@pytest.fixture
def search_client(fake_exa: FakeExa) -> ExaSearchClient:
    """Search adapter wired to the fake backend."""
    return ExaSearchClient("test-key", transport=fake_exa.transport)


@pytest.fixture
def session(search_client: ExaSearchClient) -> BridgeSession:
    """Session state with the real solver and an empty cache."""
    return BridgeSession(search=search_client)


@pytest.fixture
def dispatcher(session: BridgeSession) -> Dispatcher:
    """Dispatcher over the full tool registry."""
    return Dispatcher(build_registry(), session)
