"""In-memory sliding window rate limiter for the correction endpoint."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from time import monotonic
from typing import Callable, Deque, Dict, Optional

from fastapi import HTTPException, status

from config import config

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."


class SimpleRateLimiter:
    """Naive in-memory sliding window limiter keyed by client IP.

    State is per process; running several workers multiplies the effective limit.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: int,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        self.limit = limit
        self.window_seconds = max(window_seconds, 1)
        self._clock = clock
        self._events: Dict[str, Deque[float]] = {}
        self._lock = asyncio.Lock()

    def _purge(self, now: float) -> None:
        """Drop expired events and empty buckets. Must be called with lock held."""
        cutoff = now - self.window_seconds
        for key in list(self._events):
            bucket = self._events[key]
            while bucket and bucket[0] <= cutoff:
                bucket.popleft()
            if not bucket:
                del self._events[key]

    async def check(self, key: str) -> None:
        """Record one request for key, or raise 429 if the window is full."""
        if self.limit <= 0:
            return
        now = self._clock()
        async with self._lock:
            # Lazy purge keeps memory bounded when many clients pass through
            if len(self._events) > 500:
                self._purge(now)
            bucket = self._events.setdefault(key, deque())
            cutoff = now - self.window_seconds
            while bucket and bucket[0] <= cutoff:
                bucket.popleft()
            if len(bucket) >= self.limit:
                logger.warning("Rate limit exceeded for client %s", key)
                raise HTTPException(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    detail=RATE_LIMIT_MESSAGE,
                )
            bucket.append(now)

    async def remaining(self, key: str) -> int:
        """Requests still allowed for key in the current window."""
        if self.limit <= 0:
            return -1
        now = self._clock()
        async with self._lock:
            bucket = self._events.get(key)
            if not bucket:
                return self.limit
            cutoff = now - self.window_seconds
            active = sum(1 for ts in bucket if ts > cutoff)
            return max(self.limit - active, 0)


_rate_limiter: Optional[SimpleRateLimiter] = None


def get_rate_limiter() -> SimpleRateLimiter:
    """Provide the process-wide rate limiter instance."""
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = SimpleRateLimiter(
            limit=config.RATE_LIMIT.max_requests,
            window_seconds=config.RATE_LIMIT.window_seconds,
        )
    return _rate_limiter


def reset_rate_limiter() -> None:
    """Forget the shared limiter so the next request builds a fresh one."""
    global _rate_limiter
    _rate_limiter = None
