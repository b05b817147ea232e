from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from bizauth.app.repositories.session_repository import ISessionRepository
from bizauth.domain.entities import Account, Business, IssuedToken


class SessionRepository(ISessionRepository):
    """Issued token repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, issued_token: IssuedToken) -> IssuedToken:
        """Record a newly issued token"""
        self.session.add(issued_token)
        await self.session.flush()
        await self.session.refresh(issued_token)
        return issued_token

    async def find_live(
        self, token_digest: str, account_id: UUID, now: datetime
    ) -> Optional[IssuedToken]:
        """
        Find the live record of a token.

        Live means: active, not expired, and owned by an active account of an
        active business. The owning account must match account_id.
        """
        stmt = (
            select(IssuedToken)
            .join(
                Account,
                (Account.id == IssuedToken.account_id)
                & (Account.business_id == IssuedToken.business_id),
            )
            .join(Business, Business.id == IssuedToken.business_id)
            .where(
                IssuedToken.token_digest == token_digest,
                IssuedToken.account_id == account_id,
                IssuedToken.active == True,
                IssuedToken.expires_at > now,
                Account.active == True,
                Business.active == True,
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def deactivate(self, token_digest: str, account_id: UUID) -> int:
        """Deactivate the account's active records for the digest"""
        stmt = (
            update(IssuedToken)
            .where(
                IssuedToken.token_digest == token_digest,
                IssuedToken.account_id == account_id,
                IssuedToken.active == True,
            )
            .values(active=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
