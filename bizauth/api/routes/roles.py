"""
Role Administration API Routes

Owner-only management of roles, account roles and route grants.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from bizauth.api.error import unwrap_admin_result
from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.app.use_cases.roles import (
    AssignAccountRoleUseCase,
    CreateRoleUseCase,
    DeactivateRoleUseCase,
    GrantRouteUseCase,
    ListRolesUseCase,
    RemoveAccountRoleUseCase,
    RevokeRouteUseCase,
    UpdateRoleUseCase,
)
from bizauth.app.use_cases.roles.dtos import AccountRoleInfo, RoleInfo, RouteGrantInfo
from bizauth.depends import ClientInfo, get_audit_sink, get_current_principal, get_unit_of_work
from bizauth.domain.auth import Principal

router = APIRouter(prefix="/roles", tags=["Roles"])


class CreateRoleRequest(BaseModel):
    name: str = Field(..., max_length=100, description="Role name (min 2 chars)")
    color: Optional[str] = Field(None, description="Hex color like #1A2B3C")


class UpdateRoleRequest(BaseModel):
    name: str = Field(..., max_length=100, description="Role name (min 2 chars)")
    color: str = Field(..., description="Hex color like #1A2B3C")


class RouteGrantRequest(BaseModel):
    route: str = Field(..., max_length=255, description="Route path, e.g. /audit-logs")


@router.get("", status_code=status.HTTP_200_OK, response_model=List[RoleInfo])
async def list_roles(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return unwrap_admin_result(await ListRolesUseCase(uow).execute(principal))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RoleInfo)
async def create_role(
    request: CreateRoleRequest,
    client: ClientInfo = Depends(ClientInfo),
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit_sink=Depends(get_audit_sink),
):
    """
    Create Role

    Raises:
        - 400 Bad Request: Name shorter than 2 chars or invalid color
        - 403 Forbidden: Caller is not the company owner
        - 409 Conflict: An active role already has this name
    """
    result = await CreateRoleUseCase(uow, audit_sink).execute(
        principal,
        request.name,
        request.color,
        client_ip=client.ip,
        user_agent=client.user_agent,
    )
    return unwrap_admin_result(result)


@router.put("/{role_id}", status_code=status.HTTP_200_OK, response_model=RoleInfo)
async def update_role(
    role_id: UUID,
    request: UpdateRoleRequest,
    client: ClientInfo = Depends(ClientInfo),
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit_sink=Depends(get_audit_sink),
):
    """
    Update Role

    Raises:
        - 400 Bad Request: Name shorter than 2 chars or invalid color
        - 403 Forbidden: Caller is not the company owner
        - 404 Not Found: No active role with this id in the business
        - 409 Conflict: Another active role already has this name
    """
    result = await UpdateRoleUseCase(uow, audit_sink).execute(
        principal,
        role_id,
        request.name,
        request.color,
        client_ip=client.ip,
        user_agent=client.user_agent,
    )
    return unwrap_admin_result(result)


@router.delete("/{role_id}", status_code=status.HTTP_200_OK, response_model=RoleInfo)
async def deactivate_role(
    role_id: UUID,
    client: ClientInfo = Depends(ClientInfo),
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit_sink=Depends(get_audit_sink),
):
    """Soft-deletes a role; its grants stop applying immediately."""
    result = await DeactivateRoleUseCase(uow, audit_sink).execute(
        principal, role_id, client_ip=client.ip, user_agent=client.user_agent
    )
    return unwrap_admin_result(result)


@router.put(
    "/{role_id}/accounts/{account_id}",
    status_code=status.HTTP_200_OK,
    response_model=AccountRoleInfo,
)
async def assign_account_role(
    role_id: UUID,
    account_id: UUID,
    client: ClientInfo = Depends(ClientInfo),
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit_sink=Depends(get_audit_sink),
):
    result = await AssignAccountRoleUseCase(uow, audit_sink).execute(
        principal, account_id, role_id, client_ip=client.ip, user_agent=client.user_agent
    )
    return unwrap_admin_result(result)


@router.delete(
    "/{role_id}/accounts/{account_id}",
    status_code=status.HTTP_200_OK,
    response_model=AccountRoleInfo,
)
async def remove_account_role(
    role_id: UUID,
    account_id: UUID,
    client: ClientInfo = Depends(ClientInfo),
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit_sink=Depends(get_audit_sink),
):
    result = await RemoveAccountRoleUseCase(uow, audit_sink).execute(
        principal, account_id, role_id, client_ip=client.ip, user_agent=client.user_agent
    )
    return unwrap_admin_result(result)


@router.post(
    "/{role_id}/routes", status_code=status.HTTP_201_CREATED, response_model=RouteGrantInfo
)
async def grant_route(
    role_id: UUID,
    request: RouteGrantRequest,
    client: ClientInfo = Depends(ClientInfo),
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit_sink=Depends(get_audit_sink),
):
    result = await GrantRouteUseCase(uow, audit_sink).execute(
        principal, role_id, request.route, client_ip=client.ip, user_agent=client.user_agent
    )
    return unwrap_admin_result(result)


@router.delete(
    "/{role_id}/routes", status_code=status.HTTP_200_OK, response_model=RouteGrantInfo
)
async def revoke_route(
    role_id: UUID,
    route: str,
    client: ClientInfo = Depends(ClientInfo),
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit_sink=Depends(get_audit_sink),
):
    """Revokes a route grant. The route is passed as a query parameter."""
    result = await RevokeRouteUseCase(uow, audit_sink).execute(
        principal, role_id, route, client_ip=client.ip, user_agent=client.user_agent
    )
    return unwrap_admin_result(result)
