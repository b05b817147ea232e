from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from bizauth.app.repositories.business_repository import IBusinessRepository
from bizauth.domain.entities import Business


class BusinessRepository(IBusinessRepository):
    """Business repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, business_id: UUID) -> Optional[Business]:
        """Get business by ID"""
        stmt = select(Business).where(Business.id == business_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_document(self, document: str) -> Optional[Business]:
        """Get business by document"""
        stmt = select(Business).where(Business.document == document)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, business: Business) -> Business:
        """Create a new business"""
        self.session.add(business)
        await self.session.flush()
        await self.session.refresh(business)
        return business
