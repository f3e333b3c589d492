"""Tests for the Deezer upstream client.

The network is replaced with httpx.MockTransport; the client code itself
(param cleaning, error collapsing, failure mapping) is real.
"""
from types import SimpleNamespace

import httpx
import pytest
import pytest_asyncio

from app import deezer_client


@pytest_asyncio.fixture
async def upstream():
    """Install a MockTransport-backed client. Tests set ``upstream.handler``."""
    state = SimpleNamespace(requests=[], handler=lambda request: httpx.Response(200, json={}))

    def dispatch(request: httpx.Request) -> httpx.Response:
        state.requests.append(request)
        return state.handler(request)

    await deezer_client.close_client()
    deezer_client.init_client(transport=httpx.MockTransport(dispatch))
    yield state
    await deezer_client.close_client()


async def test_success_returns_json(upstream):
    payload = {"id": 3135556, "title": "Harder, Better, Faster, Stronger"}
    upstream.handler = lambda request: httpx.Response(200, json=payload)

    result = await deezer_client.fetch("/track/3135556")

    assert result == (payload, None, 200)
    req = upstream.requests[0]
    assert req.method == "GET"
    assert req.url.path == "/track/3135556"
    assert req.url.host == "api.deezer.com"
    assert req.headers["accept"] == "application/json"


async def test_empty_params_are_dropped(upstream):
    await deezer_client.fetch("/search", {"q": "daft punk", "order": None, "limit": 10, "index": 0, "strict": ""})
    params = upstream.requests[0].url.params
    assert dict(params) == {"q": "daft punk", "limit": "10", "index": "0"}


async def test_upstream_error_object_maps_to_404(upstream):
    upstream.handler = lambda request: httpx.Response(
        200, json={"error": {"type": "DataException", "message": "no data", "code": 800}},
    )
    result = await deezer_client.fetch("/track/1")
    assert result == (None, "no data", 404)


async def test_every_upstream_error_collapses_to_404(upstream):
    upstream.handler = lambda request: httpx.Response(
        200, json={"error": {"type": "ParameterException", "message": "Wrong parameter", "code": 500}},
    )
    result = await deezer_client.fetch("/search", {"q": "x"})
    assert result.status == 404


async def test_upstream_error_without_message(upstream):
    upstream.handler = lambda request: httpx.Response(200, json={"error": {"code": 4}})
    result = await deezer_client.fetch("/chart")
    assert result == (None, "Deezer API error", 404)


async def test_list_payload_passes_through(upstream):
    upstream.handler = lambda request: httpx.Response(200, json=[{"id": 1}])
    result = await deezer_client.fetch("/radio/lists")
    assert result == ([{"id": 1}], None, 200)


async def test_invalid_json_maps_to_502(upstream):
    upstream.handler = lambda request: httpx.Response(200, text="<html>oops</html>")
    result = await deezer_client.fetch("/track/1")
    assert result == (None, "Failed to fetch from Deezer API", 502)


async def test_transport_error_maps_to_502(upstream):
    def fail(request):
        raise httpx.ConnectError("connection refused", request=request)

    upstream.handler = fail
    result = await deezer_client.fetch("/track/1")
    assert result.status == 502
    assert result.data is None


async def test_timeout_maps_to_502(upstream):
    def slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    upstream.handler = slow
    assert (await deezer_client.fetch("/track/1")).status == 502


async def test_fetch_requires_init():
    await deezer_client.close_client()
    with pytest.raises(RuntimeError):
        await deezer_client.fetch("/track/1")


async def test_init_client_is_idempotent(upstream):
    first = deezer_client._client
    deezer_client.init_client()
    assert deezer_client._client is first
