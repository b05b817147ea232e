"""
Get Audit Events Use Case

Retrieves audit events of a business with cursor pagination.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.libs.result import Error, Result, Return

MAX_PAGE_SIZE = 100


class GetAuditEventsUseCase:
    """
    Use case for retrieving audit events for a business.

    Business Rules:
    - Access to the audit log route is checked before this runs
    - Results are business-scoped (only events of the caller's business)
    - Results ordered by newest first
    - Supports cursor-based pagination
    - Each event includes context, account email, timestamp and data
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        business_id: UUID,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        """
        Execute get audit events use case.

        Args:
            business_id: Business UUID from the authenticated principal
            limit: Maximum number of events to return (1..100)
            cursor: Pagination cursor (optional)

        Returns:
            Result with events list and next_cursor, or Error
        """
        if limit < 1 or limit > MAX_PAGE_SIZE:
            return Return.err(
                Error("INVALID_LIMIT", f"limit must be between 1 and {MAX_PAGE_SIZE}")
            )

        async with self.uow:
            try:
                events, next_cursor = await self.uow.audit_events.get_by_business_paginated(
                    business_id, limit=limit, cursor=cursor
                )
            except ValueError:
                return Return.err(Error("INVALID_CURSOR", "Pagination cursor is invalid"))

            emails: Dict[UUID, Optional[str]] = {}
            events_list = []
            for event in events:
                account_email = None
                if event.account_id:
                    if event.account_id not in emails:
                        account = await self.uow.accounts.get_in_business(
                            event.account_id, business_id
                        )
                        emails[event.account_id] = account.email if account else None
                    account_email = emails[event.account_id]

                events_list.append(
                    {
                        "id": str(event.id),
                        "context": event.context.value,
                        "description": event.description,
                        "account_email": account_email,
                        "ip_address": event.ip_address,
                        "user_agent": event.user_agent,
                        "timestamp": event.created_at.isoformat(),
                        "additional_data": event.additional_data or {},
                    }
                )

            return Return.ok({"events": events_list, "next_cursor": next_cursor})
