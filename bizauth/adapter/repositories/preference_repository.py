from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from bizauth.app.repositories.preference_repository import IAccountPreferenceRepository
from bizauth.domain.entities import AccountPreference


class AccountPreferenceRepository(IAccountPreferenceRepository):
    """AccountPreference repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_account(
        self, business_id: UUID, account_id: UUID
    ) -> Optional[AccountPreference]:
        stmt = select(AccountPreference).where(
            AccountPreference.business_id == business_id,
            AccountPreference.account_id == account_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, preference: AccountPreference) -> AccountPreference:
        self.session.add(preference)
        await self.session.flush()
        await self.session.refresh(preference)
        return preference
