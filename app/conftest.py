"""Pytest 配置文件"""

from collections.abc import Awaitable, Callable

import httpx
import pytest

from libs.fluent_http import HttpEngine

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


@pytest.fixture
async def mock_engine():
    """Build engines whose client is served by an httpx.MockTransport handler."""
    clients: list[httpx.AsyncClient] = []

    def factory(handler: Handler) -> HttpEngine:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return HttpEngine(client)

    yield factory

    for client in clients:
        await client.aclose()


@pytest.fixture
def fast_progress(monkeypatch):
    """Poll progress every millisecond instead of the configured tick."""
    from configs import app_config

    monkeypatch.setattr(app_config, "HTTP_PROGRESS_POLL_INTERVAL", 0.001)
