import logging
from typing import Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from bizauth.app.services.cache import CacheError, ICache

logger = logging.getLogger(__name__)


class RedisCache(ICache):
    """Thin Redis wrapper used for the token blacklist and login rate limits."""

    DEFAULT_OPERATION_TIMEOUT = 5.0

    def __init__(self, redis_url: str, *, socket_timeout: float = DEFAULT_OPERATION_TIMEOUT):
        self.redis_url = redis_url
        self.client = aioredis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self.client.get(key)
        except RedisError as exc:
            raise CacheError(f"GET {key} failed") from exc

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self.client.set(key, value, ex=max(1, ttl_seconds))
        except RedisError as exc:
            raise CacheError(f"SET {key} failed") from exc

    async def exists(self, key: str) -> bool:
        try:
            return bool(await self.client.exists(key))
        except RedisError as exc:
            raise CacheError(f"EXISTS {key} failed") from exc

    async def delete(self, key: str) -> None:
        try:
            await self.client.delete(key)
        except RedisError as exc:
            raise CacheError(f"DEL {key} failed") from exc

    async def incr(self, key: str, ttl_seconds: int) -> int:
        """INCR, and start the expiry when the counter is created."""
        try:
            pipe = self.client.pipeline()
            pipe.incr(key)
            pipe.expire(key, max(1, ttl_seconds), nx=True)
            count, _ = await pipe.execute()
            return int(count)
        except RedisError as exc:
            raise CacheError(f"INCR {key} failed") from exc

    async def ttl(self, key: str) -> int:
        try:
            remaining = await self.client.ttl(key)
        except RedisError as exc:
            raise CacheError(f"TTL {key} failed") from exc
        # -2: missing key, -1: no expiry
        return max(0, int(remaining))
