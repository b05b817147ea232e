from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from bizauth.domain.entities import IssuedToken


class ISessionRepository(ABC):
    """Issued token (session) repository interface - application layer"""

    @abstractmethod
    async def create(self, issued_token: IssuedToken) -> IssuedToken:
        """Record a newly issued token"""
        pass

    @abstractmethod
    async def find_live(
        self, token_digest: str, account_id: UUID, now: datetime
    ) -> Optional[IssuedToken]:
        """
        Find an active, unexpired record whose owning account and business
        are both active.
        """
        pass

    @abstractmethod
    async def deactivate(self, token_digest: str, account_id: UUID) -> int:
        """Deactivate the account's active records for the digest. Returns count."""
        pass
