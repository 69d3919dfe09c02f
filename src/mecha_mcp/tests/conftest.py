"""Shared fixtures: a fake backend behind httpx.MockTransport."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from mecha_mcp.foundation.config import clear_settings_cache
from mecha_mcp.io.http import ApiClient
from mecha_mcp.runtime.observability import configure_logging

BASE_URL = "https://mecha.test"
API_KEY = "mak_test_key"


@dataclass
class MockBackend:
    """Records every request and answers with the queued (or default) response.

    Example:
        >>> backend.reply(404, {"error": "Not found"})
        >>> await client.get("agents/1")
        >>> backend.last.url.path
        '/api/agents/1'
    """

    status: int = 200
    payload: Any = field(default_factory=lambda: {"result": None})
    raw: bytes | None = None
    delay: float = 0.0
    raises: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def reply(self, status: int = 200, payload: Any = None, *, raw: bytes | None = None) -> None:
        self.status, self.payload, self.raw = status, payload if payload is not None else {}, raw

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.raises is not None:
            raise self.raises
        if self.raw is not None:
            return httpx.Response(self.status, content=self.raw)
        return httpx.Response(self.status, json=self.payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def quiet_logging() -> Iterator[None]:
    configure_logging("none")
    yield


@pytest.fixture
def backend() -> MockBackend:
    return MockBackend()


@pytest.fixture
def client(backend: MockBackend) -> ApiClient:
    return ApiClient(BASE_URL, API_KEY, transport=backend.transport)


@pytest.fixture
def settings_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> Iterator[pytest.MonkeyPatch]:
    """Clean environment with the two required variables set; no .env file in reach."""
    monkeypatch.chdir(tmp_path)
    for var in ("SERVER_URL", "API_KEY", "TIMEOUT_MS", "LOG_LEVEL", "LOG_FORMAT",
                "MCP_NAME", "MCP_TRANSPORT", "MCP_HOST", "MCP_PORT"):
        monkeypatch.delenv(f"MECHA_AGENT_{var}", raising=False)
    monkeypatch.setenv("MECHA_AGENT_SERVER_URL", BASE_URL)
    monkeypatch.setenv("MECHA_AGENT_API_KEY", API_KEY)
    clear_settings_cache()
    yield monkeypatch
    clear_settings_cache()
