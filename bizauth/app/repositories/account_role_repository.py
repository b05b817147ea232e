from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from bizauth.domain.entities import AccountRole


class IAccountRoleRepository(ABC):
    """AccountRole repository interface - application layer"""

    @abstractmethod
    async def get(
        self, business_id: UUID, account_id: UUID, role_id: UUID
    ) -> Optional[AccountRole]:
        """Get the grant of a role to an account"""
        pass

    @abstractmethod
    async def create(self, account_role: AccountRole) -> AccountRole:
        """Grant a role to an account"""
        pass

    @abstractmethod
    async def delete(self, business_id: UUID, account_id: UUID, role_id: UUID) -> bool:
        """Remove the grant. Returns True if a row was deleted."""
        pass
