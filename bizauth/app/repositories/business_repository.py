from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from bizauth.domain.entities import Business


class IBusinessRepository(ABC):
    """Business repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, business_id: UUID) -> Optional[Business]:
        """Get business by ID"""
        pass

    @abstractmethod
    async def get_by_document(self, document: str) -> Optional[Business]:
        """Get business by document (tax id)"""
        pass

    @abstractmethod
    async def create(self, business: Business) -> Business:
        """Create a new business"""
        pass
