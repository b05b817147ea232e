from typing import Callable

from sqlmodel.ext.asyncio.session import AsyncSession

from bizauth.adapter.repositories.audit_event_repository import AuditEventRepository
from bizauth.app.services.audit_sink import IAuditSink
from bizauth.domain.entities import AuditEvent


class SqlAlchemyAuditSink(IAuditSink):
    """
    Writes audit events through a dedicated session so that an audit write
    never joins, commits or rolls back the caller's transaction.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory

    async def record(self, event: AuditEvent) -> None:
        async with self.session_factory() as session:
            await AuditEventRepository(session).create(event)
            await session.commit()
