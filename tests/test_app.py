"""Tests for the application shell: info, docs, 404/500 handling, lifespan."""
from unittest.mock import AsyncMock, patch

import httpx

from app import deezer_client
from app.config import settings


async def test_root_describes_api(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Deezer API Proxy"
    assert body["status"] == "healthy"
    assert body["documentation"]["openapi"] == "/doc"
    assert body["documentation"]["swagger"] == "/ui"
    assert body["endpoints"]["chart"]["subRoutes"] == [
        "/chart/tracks", "/chart/albums", "/chart/artists", "/chart/playlists", "/chart/podcasts",
    ]
    assert body["rateLimit"] == {
        "limit": 100,
        "window": "1 minute",
        "headers": ["X-RateLimit-Limit", "X-RateLimit-Remaining", "X-RateLimit-Reset"],
    }


async def test_health(client):
    resp = await client.get("/health")
    assert resp.json() == {"status": "ok"}


async def test_openapi_document(client):
    resp = await client.get("/doc")
    assert resp.status_code == 200
    doc = resp.json()
    assert doc["info"]["title"] == "Deezer API Proxy"
    assert doc["info"]["license"]["name"] == "MIT"
    for path in ("/search", "/search/track", "/track/{id}", "/album/{id}/tracks", "/chart/tracks", "/editorial/{id}/charts"):
        assert path in doc["paths"]
    params = {p["name"] for p in doc["paths"]["/album/{id}/tracks"]["get"]["parameters"]}
    assert params == {"id", "limit", "index"}
    assert "429" in doc["paths"]["/track/{id}"]["get"]["responses"]


async def test_swagger_ui(client):
    resp = await client.get("/ui")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "/doc" in resp.text


async def test_unknown_endpoint_lists_available(client):
    resp = await client.get("/does/not/exist")
    assert resp.status_code == 404
    body = resp.json()
    assert body["error"] == "Not Found"
    assert body["message"] == "The requested endpoint does not exist"
    assert body["documentation"] == "/ui"
    for endpoint in ("GET /", "GET /doc", "GET /ui", "GET /search", "GET /track/{id}", "GET /podcast/{id}/episodes"):
        assert endpoint in body["availableEndpoints"]


async def test_unhandled_error_is_500(monkeypatch):
    from main import app

    monkeypatch.setattr(settings, "environment", "production")
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    with patch("app.deezer_client.fetch", AsyncMock(side_effect=RuntimeError("kaboom"))):
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
            resp = await c.get("/track/1")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal Server Error", "message": "An unexpected error occurred"}


async def test_unhandled_error_detail_in_development(monkeypatch):
    from main import app

    monkeypatch.setattr(settings, "environment", "development")
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    with patch("app.deezer_client.fetch", AsyncMock(side_effect=RuntimeError("kaboom"))):
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
            resp = await c.get("/track/1")
    assert resp.status_code == 500
    assert resp.json()["message"] == "kaboom"


async def test_lifespan_starts_and_stops_resources(rate_limiter):
    from main import app

    await deezer_client.close_client()
    async with app.router.lifespan_context(app):
        assert deezer_client._client is not None
        assert rate_limiter.running
    assert deezer_client._client is None
    assert not rate_limiter.running


async def test_unknown_endpoint_lists_every_documented_get_route(client):
    from main import app

    listed = (await client.get("/does/not/exist")).json()["availableEndpoints"]
    assert listed[:2] == ["GET /doc", "GET /ui"]
    assert set(listed[2:]) == {f"GET {path}" for path in app.openapi()["paths"]}
    assert "GET /chart/tracks" in listed
    assert "GET /track/isrc/{isrc}" in listed


async def test_wrong_method_uses_error_shape(client):
    resp = await client.post("/health")
    assert resp.status_code == 405
    assert resp.json() == {"error": "Method Not Allowed", "message": "Method Not Allowed"}
    assert "GET" in resp.headers["allow"]
    assert "X-RateLimit-Limit" in resp.headers
