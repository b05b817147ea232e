from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from bizauth.app.repositories.account_repository import IAccountRepository
from bizauth.domain.entities import Account, Business


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        stmt = select(Account).where(Account.id == account_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_in_business(
        self, account_id: UUID, business_id: UUID
    ) -> Optional[Account]:
        """Get account by ID, scoped to its business"""
        stmt = select(Account).where(
            Account.id == account_id, Account.business_id == business_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by email"""
        stmt = select(Account).where(Account.email == email).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_active_by_email(self, email: str) -> Optional[Account]:
        """Get active account of an active business by email"""
        stmt = (
            select(Account)
            .join(Business, Business.id == Account.business_id)
            .where(
                Account.email == email,
                Account.active == True,
                Business.active == True,
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_by_business(self, business_id: UUID) -> List[Account]:
        stmt = (
            select(Account)
            .where(Account.business_id == business_id)
            .order_by(Account.name, Account.email)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, account: Account) -> Account:
        """Create a new account"""
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def update(self, account: Account) -> Account:
        """Update an existing account"""
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account
