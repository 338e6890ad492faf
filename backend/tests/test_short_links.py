from __future__ import annotations

import httpx
import pytest

from masar.services import links


SHORT_URL = "https://maps.app.goo.gl/abc123"
FULL_URL = "https://www.google.com/maps/place/@30.0444,31.2357,15z"


def _use_transport(monkeypatch, handler):
    real_client = httpx.AsyncClient

    def _client(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(links.httpx, "AsyncClient", _client)


@pytest.mark.asyncio
async def test_resolve_short_link_follows_redirects(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "maps.app.goo.gl":
            return httpx.Response(302, headers={"location": FULL_URL})
        return httpx.Response(200, text="ok")

    _use_transport(monkeypatch, handler)

    assert await links.resolve_short_link(SHORT_URL) == FULL_URL


@pytest.mark.asyncio
async def test_resolve_short_link_returns_none_on_transport_error(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    _use_transport(monkeypatch, handler)

    assert await links.resolve_short_link(SHORT_URL) is None


@pytest.mark.asyncio
async def test_resolve_short_link_returns_none_on_error_status(monkeypatch):
    _use_transport(monkeypatch, lambda request: httpx.Response(404))

    assert await links.resolve_short_link(SHORT_URL) is None
