"""Per-client fixed-window rate limiter (in-memory).

Counters live in process memory and are lost on restart. Each client
identity gets one window of ``window_ms``; the first request opens it and
every request inside it (admitted or not) bumps the counter.
"""
import asyncio
import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping

from app.config import DEFAULT_IP_HEADERS, Settings

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"
RATE_LIMIT_ERROR = "Too Many Requests"


def _now_ms() -> int:
    return int(time.time() * 1000)


def describe_window(window_ms: int) -> str:
    """Human-readable window length, e.g. ``"1 minute"`` or ``"30 seconds"``."""
    for unit_ms, unit in ((3_600_000, "hour"), (60_000, "minute"), (1000, "second")):
        if window_ms % unit_ms == 0:
            n = window_ms // unit_ms
            return f"{n} {unit}" if n == 1 else f"{n} {unit}s"
    return f"{window_ms} milliseconds"


def client_identity(headers: Mapping[str, str], ip_headers: Iterable[str] = DEFAULT_IP_HEADERS) -> str:
    """Return the client IP from the first header that carries one.

    Forwarded-for chains are comma-separated; the left-most entry is the
    original client. Falls back to a shared ``"unknown"`` bucket.
    """
    for name in ip_headers:
        value = headers.get(name)
        if value:
            ip = value.split(",")[0].strip()
            if ip:
                return ip
    return UNKNOWN_CLIENT


@dataclass
class RateLimitEntry:
    count: int
    reset_time: int  # epoch ms


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_time: int
    window: str
    retry_after: int | None = None

    def headers(self) -> dict[str, str]:
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_time),
        }
        if self.retry_after is not None:
            headers["Retry-After"] = str(self.retry_after)
        return headers

    def body(self) -> dict:
        return {
            "error": RATE_LIMIT_ERROR,
            "message": f"Rate limit exceeded. Please try again in {self.retry_after} seconds.",
            "retryAfter": self.retry_after,
            "limit": self.limit,
            "window": self.window,
        }


class RateLimiter:
    def __init__(
        self,
        limit: int = 100,
        window_ms: int = 60_000,
        cleanup_interval_ms: int = 300_000,
        ip_headers: Iterable[str] = DEFAULT_IP_HEADERS,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        if limit < 1 or window_ms < 1 or cleanup_interval_ms < 1:
            raise ValueError("limit, window_ms and cleanup_interval_ms must be positive")
        self.limit = limit
        self.window_ms = window_ms
        self.cleanup_interval_ms = cleanup_interval_ms
        self.ip_headers = tuple(h.lower() for h in ip_headers)
        self.window = describe_window(window_ms)
        self._clock = clock
        self._entries: dict[str, RateLimitEntry] = {}
        # Guards read-modify-write on an entry; never held across an await.
        self._lock = threading.Lock()
        self._sweep_task: asyncio.Task | None = None

    def identify(self, headers: Mapping[str, str]) -> str:
        return client_identity(headers, self.ip_headers)

    def hit(self, identity: str) -> RateLimitDecision:
        """Count one request for ``identity`` and decide whether to admit it."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(identity)
            if entry is None or now > entry.reset_time:
                entry = RateLimitEntry(count=1, reset_time=now + self.window_ms)
                self._entries[identity] = entry
            else:
                entry.count += 1
            count, reset_time = entry.count, entry.reset_time

        remaining = max(0, self.limit - count)
        if count <= self.limit:
            return RateLimitDecision(True, self.limit, remaining, reset_time, self.window)

        retry_after = max(0, math.ceil((reset_time - now) / 1000))
        # One INFO line per client per window; repeats go to DEBUG.
        level = logging.INFO if count == self.limit + 1 else logging.DEBUG
        logger.log(level, "Rate limit exceeded for %s (%d/%d), retry in %ds", identity, count, self.limit, retry_after)
        return RateLimitDecision(False, self.limit, remaining, reset_time, self.window, retry_after)

    def sweep(self) -> int:
        """Drop entries whose window has ended. Returns the number removed."""
        now = self._clock()
        with self._lock:
            stale = [ident for ident, entry in self._entries.items() if entry.reset_time <= now]
            for ident in stale:
                del self._entries[ident]
        if stale:
            logger.debug("Rate limiter sweep removed %d expired entries", len(stale))
        return len(stale)

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identity: str) -> bool:
        return identity in self._entries

    def get(self, identity: str) -> RateLimitEntry | None:
        return self._entries.get(identity)

    # -----------------------------------------------------------------------
    # Background sweep
    # -----------------------------------------------------------------------

    async def _sweep_loop(self) -> None:
        interval = self.cleanup_interval_ms / 1000
        while True:
            await asyncio.sleep(interval)
            try:
                self.sweep()
            except Exception:
                logger.exception("Rate limiter sweep failed")

    def start(self) -> None:
        """Schedule the periodic sweep on the running loop. Idempotent."""
        if self._sweep_task is not None and not self._sweep_task.done():
            return
        self._sweep_task = asyncio.create_task(self._sweep_loop())
        self._sweep_task.add_done_callback(_sweep_done)

    async def stop(self) -> None:
        task, self._sweep_task = self._sweep_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    @property
    def running(self) -> bool:
        return self._sweep_task is not None and not self._sweep_task.done()


def _sweep_done(task: asyncio.Task) -> None:
    if not task.cancelled() and task.exception():
        logger.error("Rate limiter sweep task terminated: %s", task.exception())


def build_rate_limiter(settings: Settings) -> RateLimiter:
    return RateLimiter(
        limit=settings.rate_limit_requests,
        window_ms=settings.rate_limit_window_ms,
        cleanup_interval_ms=settings.rate_limit_cleanup_interval_ms,
        ip_headers=settings.rate_limit_ip_headers,
    )
