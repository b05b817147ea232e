from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from bizauth.domain.entities import Role


class IRoleRepository(ABC):
    """
    Role repository interface - application layer

    Every read returns active roles of the given business only.
    """

    @abstractmethod
    async def get_active_by_id(self, role_id: UUID, business_id: UUID) -> Optional[Role]:
        """Get an active role of the business by ID"""
        pass

    @abstractmethod
    async def get_active_by_name(self, business_id: UUID, name: str) -> Optional[Role]:
        """Get an active role of the business by name"""
        pass

    @abstractmethod
    async def list_active(self, business_id: UUID) -> List[Role]:
        """List active roles of the business ordered by name"""
        pass

    @abstractmethod
    async def get_active_role_ids_for_account(
        self, account_id: UUID, business_id: UUID
    ) -> List[UUID]:
        """IDs of the active roles the account holds in the business"""
        pass

    @abstractmethod
    async def create(self, role: Role) -> Role:
        """Create a new role"""
        pass

    @abstractmethod
    async def update(self, role: Role) -> Role:
        """Update existing role"""
        pass
