import asyncio
import math
from typing import Dict, Optional, Tuple

from bizauth.app.services.cache import ICache
from bizauth.app.services.clock import IClock, SystemClock


class MemoryCache(ICache):
    """
    In-process cache with per-key expiry.

    Suitable for a single worker and for tests. Expired keys are dropped
    when touched, and writes sweep every expired key at most once per
    sweep_interval_seconds. Expiry follows the injected clock.
    """

    def __init__(self, clock: IClock = SystemClock(), sweep_interval_seconds: int = 300):
        self.clock = clock
        self.sweep_interval_seconds = sweep_interval_seconds
        self._entries: Dict[str, Tuple[str, float]] = {}
        self._lock = asyncio.Lock()
        self._next_sweep_at = 0.0

    @property
    def entry_count(self) -> int:
        return len(self._entries)

    def _now(self) -> float:
        return self.clock.now().timestamp()

    def _live(self, key: str) -> Optional[Tuple[str, float]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._now() >= entry[1]:
            del self._entries[key]
            return None
        return entry

    def _sweep_if_due(self) -> None:
        now = self._now()
        if now < self._next_sweep_at:
            return
        expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        self._next_sweep_at = now + self.sweep_interval_seconds

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            entry = self._live(key)
            return entry[0] if entry else None

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        async with self._lock:
            self._sweep_if_due()
            self._entries[key] = (value, self._now() + ttl_seconds)

    async def exists(self, key: str) -> bool:
        async with self._lock:
            return self._live(key) is not None

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._entries.pop(key, None)

    async def incr(self, key: str, ttl_seconds: int) -> int:
        async with self._lock:
            self._sweep_if_due()
            entry = self._live(key)
            if entry is None:
                self._entries[key] = ("1", self._now() + ttl_seconds)
                return 1
            count = int(entry[0]) + 1
            self._entries[key] = (str(count), entry[1])
            return count

    async def ttl(self, key: str) -> int:
        async with self._lock:
            entry = self._live(key)
            if entry is None:
                return 0
            return max(0, math.ceil(entry[1] - self._now()))
