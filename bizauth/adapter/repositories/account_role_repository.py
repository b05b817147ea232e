from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from bizauth.app.repositories.account_role_repository import IAccountRoleRepository
from bizauth.domain.entities import AccountRole


class AccountRoleRepository(IAccountRoleRepository):
    """AccountRole repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(
        self, business_id: UUID, account_id: UUID, role_id: UUID
    ) -> Optional[AccountRole]:
        stmt = select(AccountRole).where(
            AccountRole.business_id == business_id,
            AccountRole.account_id == account_id,
            AccountRole.role_id == role_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, account_role: AccountRole) -> AccountRole:
        self.session.add(account_role)
        await self.session.flush()
        await self.session.refresh(account_role)
        return account_role

    async def delete(self, business_id: UUID, account_id: UUID, role_id: UUID) -> bool:
        stmt = delete(AccountRole).where(
            AccountRole.business_id == business_id,
            AccountRole.account_id == account_id,
            AccountRole.role_id == role_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
