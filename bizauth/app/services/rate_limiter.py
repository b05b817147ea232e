"""
Rate Limiter

Fixed-window attempt counters per client key (usually the client IP).
Counting is approximate under concurrent bursts, which is acceptable for
brute-force protection; counters never go negative and expired windows are
swept so the key map stays bounded.
"""

import asyncio
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict

from bizauth.app.services.cache import CacheError, ICache
from bizauth.app.services.clock import IClock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    retry_after: int = 0  # seconds until the window resets, 0 when allowed


class IRateLimiter(ABC):
    @abstractmethod
    async def check(
        self, client_key: str, limit: int, window_seconds: int
    ) -> RateLimitDecision:
        """Count one attempt for client_key and decide whether it may proceed"""
        pass


def _validate(limit: int, window_seconds: int) -> None:
    if limit <= 0:
        raise ValueError("limit must be positive")
    if window_seconds <= 0:
        raise ValueError("window_seconds must be positive")


@dataclass
class _Window:
    count: int
    reset_at: float


class FixedWindowRateLimiter(IRateLimiter):
    """
    In-process limiter.

    A single asyncio.Lock guards the counter map. Windows past reset_at are
    restarted lazily on access, and every sweep_interval_seconds all expired
    windows are dropped under the same lock.
    """

    def __init__(self, clock: IClock, sweep_interval_seconds: int = 300):
        self.clock = clock
        self.sweep_interval_seconds = sweep_interval_seconds
        self._windows: Dict[str, _Window] = {}
        self._lock = asyncio.Lock()
        self._next_sweep_at = 0.0

    @property
    def tracked_keys(self) -> int:
        return len(self._windows)

    async def check(
        self, client_key: str, limit: int, window_seconds: int
    ) -> RateLimitDecision:
        _validate(limit, window_seconds)
        now = self.clock.now().timestamp()

        async with self._lock:
            self._sweep_if_due(now)

            window = self._windows.get(client_key)
            if window is None or now >= window.reset_at:
                window = _Window(count=0, reset_at=now + window_seconds)
                self._windows[client_key] = window

            if window.count >= limit:
                retry_after = max(1, math.ceil(window.reset_at - now))
                return RateLimitDecision(
                    allowed=False, limit=limit, remaining=0, retry_after=retry_after
                )

            window.count += 1
            return RateLimitDecision(
                allowed=True, limit=limit, remaining=limit - window.count
            )

    def _sweep_if_due(self, now: float) -> None:
        if now < self._next_sweep_at:
            return
        expired = [key for key, w in self._windows.items() if now >= w.reset_at]
        for key in expired:
            del self._windows[key]
        if expired:
            logger.debug(f"Rate limiter swept {len(expired)} expired window(s)")
        self._next_sweep_at = now + self.sweep_interval_seconds


class CacheRateLimiter(IRateLimiter):
    """
    Limiter shared across processes through the cache (INCR + EXPIRE).

    Expired windows disappear with their cache keys. If the cache is down
    the attempt is let through; the password check still applies.
    """

    KEY_PREFIX = "rate_limit:"

    def __init__(self, cache: ICache):
        self.cache = cache

    async def check(
        self, client_key: str, limit: int, window_seconds: int
    ) -> RateLimitDecision:
        _validate(limit, window_seconds)
        key = self.KEY_PREFIX + client_key
        try:
            count = await self.cache.incr(key, window_seconds)
            if count > limit:
                retry_after = await self.cache.ttl(key)
                return RateLimitDecision(
                    allowed=False,
                    limit=limit,
                    remaining=0,
                    retry_after=max(1, retry_after),
                )
        except CacheError:
            logger.error("Rate limit cache unavailable, allowing attempt", exc_info=True)
            return RateLimitDecision(allowed=True, limit=limit, remaining=limit)

        return RateLimitDecision(allowed=True, limit=limit, remaining=limit - count)
