import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from bizauth.app.repositories.audit_event_repository import IAuditEventRepository
from bizauth.domain.entities import AuditEvent

CURSOR_SEPARATOR = "|"


def encode_cursor(event: AuditEvent) -> str:
    raw = f"{event.created_at.isoformat()}{CURSOR_SEPARATOR}{event.id}"
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("utf-8")


def decode_cursor(cursor: str) -> Tuple[datetime, UUID]:
    """Raises ValueError on a cursor this repository did not produce."""
    raw = base64.urlsafe_b64decode(cursor.encode("utf-8")).decode("utf-8")
    timestamp, event_id = raw.split(CURSOR_SEPARATOR, 1)
    return datetime.fromisoformat(timestamp), UUID(event_id)


class AuditEventRepository(IAuditEventRepository):
    """AuditEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        self.session.add(audit_event)
        await self.session.flush()
        await self.session.refresh(audit_event)
        return audit_event

    async def get_by_business_paginated(
        self, business_id: UUID, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[AuditEvent], Optional[str]]:
        """
        Get audit events for a business with cursor-based pagination.

        Cursor format: base64 of "<created_at ISO>|<event id>" of the last
        event of the previous page. Events sharing a timestamp are ordered
        by id so no event is skipped between pages.
        """
        stmt = select(AuditEvent).where(AuditEvent.business_id == business_id)

        if cursor:
            cursor_timestamp, cursor_id = decode_cursor(cursor)
            stmt = stmt.where(
                or_(
                    AuditEvent.created_at < cursor_timestamp,
                    and_(
                        AuditEvent.created_at == cursor_timestamp,
                        AuditEvent.id < cursor_id,
                    ),
                )
            )

        # Newest first, one extra row to detect another page
        stmt = stmt.order_by(AuditEvent.created_at.desc(), AuditEvent.id.desc()).limit(
            limit + 1
        )

        result = await self.session.exec(stmt)
        events = list(result.all())

        has_more = len(events) > limit
        if has_more:
            events = events[:limit]

        next_cursor = encode_cursor(events[-1]) if has_more and events else None
        return events, next_cursor
