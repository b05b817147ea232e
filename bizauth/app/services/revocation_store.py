"""
Revocation Store

Fast-path blacklist of logged-out tokens, keyed by token digest and kept
only for the remaining lifetime of the token. The durable SessionRegistry
stays the source of truth: a cache outage degrades this store to "nothing
revoked" and the registry check still decides.
"""

import logging
from datetime import timedelta

from bizauth.app.services.cache import CacheError, ICache
from bizauth.app.services.token_hasher import TokenHasher

logger = logging.getLogger(__name__)

KEY_PREFIX = "blacklist:"


class RevocationStore:
    def __init__(self, cache: ICache, hasher: TokenHasher = TokenHasher()):
        self.cache = cache
        self.hasher = hasher

    def _key(self, raw_token: str) -> str:
        return KEY_PREFIX + self.hasher.digest(raw_token)

    async def revoke(self, raw_token: str, ttl: timedelta) -> bool:
        """
        Blacklist the token for ttl. Idempotent.

        Returns:
            True if the entry was written, False if the token is already
            expired or the cache is unavailable
        """
        ttl_seconds = int(ttl.total_seconds())
        if ttl_seconds <= 0:
            return False
        try:
            await self.cache.set(self._key(raw_token), "1", ttl_seconds)
        except CacheError:
            logger.error("Revocation cache unavailable, token not blacklisted", exc_info=True)
            return False
        return True

    async def is_revoked(self, raw_token: str) -> bool:
        try:
            return await self.cache.exists(self._key(raw_token))
        except CacheError:
            logger.warning(
                "Revocation cache unavailable, deferring to session registry",
                exc_info=True,
            )
            return False
