from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from bizauth.app.repositories.role_repository import IRoleRepository
from bizauth.domain.entities import AccountRole, Role


def _active_roles_of_business(business_id: UUID):
    """Base query for every role lookup: one business, active roles only."""
    return select(Role).where(Role.business_id == business_id, Role.active == True)


class RoleRepository(IRoleRepository):
    """Role repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_active_by_id(self, role_id: UUID, business_id: UUID) -> Optional[Role]:
        stmt = _active_roles_of_business(business_id).where(Role.id == role_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_by_name(self, business_id: UUID, name: str) -> Optional[Role]:
        stmt = _active_roles_of_business(business_id).where(Role.name == name).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_active(self, business_id: UUID) -> List[Role]:
        stmt = _active_roles_of_business(business_id).order_by(Role.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_active_role_ids_for_account(
        self, account_id: UUID, business_id: UUID
    ) -> List[UUID]:
        """
        Ids of the active roles the account holds in the business.

        Both the role and the AccountRole link must carry business_id, so a
        link or role from another business never counts.
        """
        stmt = (
            select(Role.id)
            .join(AccountRole, AccountRole.role_id == Role.id)
            .where(
                Role.business_id == business_id,
                Role.active == True,
                AccountRole.business_id == business_id,
                AccountRole.account_id == account_id,
            )
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, role: Role) -> Role:
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def update(self, role: Role) -> Role:
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role
