"""Shared fixtures for the Deezer proxy test suite.

Environment variables MUST be set before any app imports because
app.config.Settings() evaluates at import time.
"""
import os

# Set env vars before any app module is imported
os.environ.setdefault("ENVIRONMENT", "test")

import httpx
import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, patch

from app.deezer_client import UpstreamResult
from app.rate_limiter import RateLimiter

T0 = 1_700_000_000_000  # epoch ms


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, now: int = T0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def rate_limiter(clock):
    """Install a fresh limiter on the app for every test.

    The app keeps its limiter on ``app.state``; without this, requests from
    one test would count against the next.
    """
    from main import app

    original = app.state.rate_limiter
    limiter = RateLimiter(limit=100, window_ms=60_000, clock=clock)
    app.state.rate_limiter = limiter
    yield limiter
    app.state.rate_limiter = original


@pytest.fixture
def mock_fetch():
    """Patch the Deezer network boundary.

    Only deezer_client.fetch is mocked; everything else (routing,
    validation, rate limiting, error mapping) is real. Tests inspect
    ``call_args`` to see what would have gone upstream.
    """
    mock = AsyncMock(return_value=UpstreamResult({"data": [], "total": 0}, None, 200))
    with patch("app.deezer_client.fetch", mock):
        yield mock


@pytest_asyncio.fixture
async def client():
    """httpx.AsyncClient using ASGITransport (bypasses lifespan)."""
    from main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
