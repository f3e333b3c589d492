"""Deezer API client: one persistent httpx client, one GET per proxied call."""
import logging
from typing import Any, NamedTuple

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

UPSTREAM_FAILURE = "Failed to fetch from Deezer API"
UPSTREAM_ERROR_DEFAULT = "Deezer API error"


class UpstreamResult(NamedTuple):
    data: Any
    error: str | None
    status: int


# ---------------------------------------------------------------------------
# Persistent HTTP client
# ---------------------------------------------------------------------------
_client: httpx.AsyncClient | None = None


def _require_client() -> httpx.AsyncClient:
    """Return the persistent client, or raise if not initialized."""
    if _client is None:
        raise RuntimeError("Deezer client not initialized, call init_client() first")
    return _client


def init_client(transport: httpx.AsyncBaseTransport | None = None) -> None:
    global _client
    if _client is not None:
        return  # idempotent, never orphan an open client
    _client = httpx.AsyncClient(
        base_url=settings.deezer_api_base.rstrip("/"),
        headers={"Accept": "application/json"},
        timeout=settings.upstream_timeout_seconds,
        transport=transport,
    )


async def close_client() -> None:
    global _client
    if _client:
        await _client.aclose()
        _client = None


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

def _clean_params(params: dict[str, Any] | None) -> dict[str, str]:
    if not params:
        return {}
    return {k: str(v) for k, v in params.items() if v is not None and v != ""}


async def fetch(path: str, params: dict[str, Any] | None = None) -> UpstreamResult:
    """GET ``path`` from Deezer.

    Deezer answers 200 with an ``{"error": {...}}`` body for unknown ids and
    bad requests alike, so every upstream-reported error maps to 404.
    Transport and decoding failures map to 502.
    """
    client = _require_client()
    try:
        resp = await client.get(path, params=_clean_params(params))
        data = resp.json()
    except (httpx.HTTPError, ValueError):
        logger.exception("Deezer request failed: GET %s", path)
        return UpstreamResult(None, UPSTREAM_FAILURE, 502)

    if isinstance(data, dict) and data.get("error"):
        err = data["error"]
        message = err.get("message") if isinstance(err, dict) else str(err)
        logger.info("Deezer returned an error for %s: %s", path, message)
        return UpstreamResult(None, message or UPSTREAM_ERROR_DEFAULT, 404)

    return UpstreamResult(data, None, 200)
