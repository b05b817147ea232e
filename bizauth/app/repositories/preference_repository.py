from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from bizauth.domain.entities import AccountPreference


class IAccountPreferenceRepository(ABC):
    """AccountPreference repository interface - application layer"""

    @abstractmethod
    async def get_by_account(
        self, business_id: UUID, account_id: UUID
    ) -> Optional[AccountPreference]:
        """Get preferences of an account"""
        pass

    @abstractmethod
    async def create(self, preference: AccountPreference) -> AccountPreference:
        """Create preferences for an account"""
        pass
