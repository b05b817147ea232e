"""
Audit API Routes

Handles audit log retrieval, gated by the /audit-logs route permission.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from bizauth.api.error import ClientError, ServerError
from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.app.use_cases.audit import GetAuditEventsUseCase
from bizauth.depends import get_unit_of_work, require_route
from bizauth.domain.auth import Principal
from bizauth.domain.routes import AUDIT_LOGS_ROUTE

router = APIRouter(tags=["Audit"])


class AuditEventResponse(BaseModel):
    """Single audit event in response"""

    id: str
    context: str
    description: str
    account_email: Optional[str]
    ip_address: Optional[str]
    user_agent: Optional[str]
    timestamp: str
    additional_data: Dict[str, Any]


class AuditEventsResponse(BaseModel):
    """GET /audit-logs response payload"""

    events: List[AuditEventResponse]
    next_cursor: Optional[str]


@router.get(
    AUDIT_LOGS_ROUTE,
    status_code=status.HTTP_200_OK,
    response_model=AuditEventsResponse,
)
async def get_audit_logs(
    principal: Principal = Depends(require_route(AUDIT_LOGS_ROUTE)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
):
    """
    Get Audit Logs

    Returns the audit log of the caller's business, newest first.

    Query Parameters:
        - limit: Maximum number of events to return (1-100, default 50)
        - cursor: Pagination cursor for fetching next page

    Raises:
        - 401 Unauthorized: Missing, invalid, expired or revoked token
        - 403 Forbidden: No role of the caller is granted /audit-logs
        - 400 Bad Request: Malformed cursor
    """
    use_case = GetAuditEventsUseCase(uow)
    result = await use_case.execute(principal.business_id, limit=limit, cursor=cursor)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_CURSOR", "INVALID_LIMIT"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
