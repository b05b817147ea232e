from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from bizauth.domain.entities import Account


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID, active or not"""
        pass

    @abstractmethod
    async def get_in_business(
        self, account_id: UUID, business_id: UUID
    ) -> Optional[Account]:
        """Get account by ID only if it belongs to the business (any status)"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by email, active or not"""
        pass

    @abstractmethod
    async def get_active_by_email(self, email: str) -> Optional[Account]:
        """Get an active account of an active business by email"""
        pass

    @abstractmethod
    async def list_by_business(self, business_id: UUID) -> List[Account]:
        """All accounts of the business, active or not, ordered by name"""
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Create a new account"""
        pass

    @abstractmethod
    async def update(self, account: Account) -> Account:
        pass
