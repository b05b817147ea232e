"""
Session Registry

Durable record of issued tokens. Operates on an already entered
UnitOfWork; the caller owns the transaction boundary and the commit.
"""

from datetime import datetime
from uuid import UUID

from bizauth.app.services.clock import IClock
from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.domain.entities import IssuedToken


class SessionRegistry:
    def __init__(self, uow: UnitOfWork, clock: IClock):
        self.uow = uow
        self.clock = clock

    async def create(
        self,
        business_id: UUID,
        account_id: UUID,
        token_digest: str,
        expires_at: datetime,
    ) -> IssuedToken:
        record = IssuedToken(
            business_id=business_id,
            account_id=account_id,
            token_digest=token_digest,
            expires_at=expires_at,
            active=True,
        )
        return await self.uow.sessions.create(record)

    async def is_active(self, token_digest: str, account_id: UUID) -> bool:
        """
        True iff an active, unexpired record with this digest belongs to
        the account and both the account and its business are active.
        """
        record = await self.uow.sessions.find_live(
            token_digest, account_id, self.clock.now()
        )
        return record is not None

    async def deactivate(self, token_digest: str, account_id: UUID) -> int:
        """Scoped by account: a digest alone never deactivates anything."""
        return await self.uow.sessions.deactivate(token_digest, account_id)
