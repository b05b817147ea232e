from abc import ABC, abstractmethod
from typing import Optional


class CacheError(Exception):
    """The cache backend could not serve the request"""


class ICache(ABC):
    """
    Key/value cache with per-key TTL - application layer

    Implementations raise CacheError when the backend is unreachable.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        pass

    @abstractmethod
    async def incr(self, key: str, ttl_seconds: int) -> int:
        """Increment a counter; a new counter expires after ttl_seconds"""
        pass

    @abstractmethod
    async def ttl(self, key: str) -> int:
        """Remaining seconds before the key expires, 0 if missing"""
        pass
