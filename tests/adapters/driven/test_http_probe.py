"""Tests for HTTP health check probing."""

import pytest
from aiohttp import test_utils, web

from src.adapters.driven.http.client import HttpClient

__all__ = []


def _status_app(status: int) -> web.Application:
    async def handler(request: web.Request) -> web.Response:
        return web.Response(status=status, text="x")

    app = web.Application()
    app.router.add_get("/healthz", handler)
    return app


@pytest.mark.asyncio
async def test_probe_success() -> None:
    """probe() should return True when GET succeeds with 200 <= status < 300."""
    async with test_utils.TestServer(_status_app(200)) as server, HttpClient() as client:
        result = await client.probe(str(server.make_url("/healthz")))

    assert result is True


@pytest.mark.asyncio
async def test_probe_failure() -> None:
    """probe() should return False for 503."""
    async with test_utils.TestServer(_status_app(503)) as server, HttpClient() as client:
        result = await client.probe(str(server.make_url("/healthz")))

    assert result is False


@pytest.mark.asyncio
async def test_probe_returns_false_if_session_not_initialized() -> None:
    """probe() should swallow the missing-session error and report unhealthy."""
    client = HttpClient()

    assert await client.probe("http://example.com") is False


@pytest.mark.asyncio
async def test_probe_returns_false_on_connection_error() -> None:
    """probe() should return False when nothing listens."""
    async with HttpClient() as client:
        result = await client.probe("http://127.0.0.1:1/healthz", timeout=1)

    assert result is False
