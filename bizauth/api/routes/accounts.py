"""
Account Administration API Routes

Owner-only management of the accounts of the caller's business.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from bizauth.api.error import unwrap_admin_result
from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.app.use_cases.accounts import (
    CreateAccountCommand,
    CreateAccountUseCase,
    DeactivateAccountUseCase,
    ListAccountsUseCase,
    UpdateAccountCommand,
    UpdateAccountUseCase,
)
from bizauth.app.use_cases.auth.dtos import AccountInfo
from bizauth.depends import (
    ClientInfo,
    get_audit_sink,
    get_current_principal,
    get_password_hasher,
    get_unit_of_work,
)
from bizauth.domain.auth import Principal

router = APIRouter(prefix="/accounts", tags=["Accounts"])


class CreateAccountRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=255, description="Account name")
    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., min_length=8, max_length=128, description="Password (min 8 chars)")


class UpdateAccountRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8, max_length=128)
    active: Optional[bool] = None


@router.get("", status_code=status.HTTP_200_OK, response_model=List[AccountInfo])
async def list_accounts(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return unwrap_admin_result(await ListAccountsUseCase(uow).execute(principal))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=AccountInfo)
async def create_account(
    request: CreateAccountRequest,
    client: ClientInfo = Depends(ClientInfo),
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher=Depends(get_password_hasher),
    audit_sink=Depends(get_audit_sink),
):
    """
    Create Account

    Adds a regular account to the caller's business. Roles are assigned
    separately through /roles.

    Raises:
        - 403 Forbidden: Caller is not the company owner
        - 409 Conflict: Email already registered
    """
    command = CreateAccountCommand(
        name=request.name, email=request.email, password=request.password
    )
    result = await CreateAccountUseCase(uow, password_hasher, audit_sink).execute(
        principal, command, client_ip=client.ip, user_agent=client.user_agent
    )
    return unwrap_admin_result(result)


@router.put("/{account_id}", status_code=status.HTTP_200_OK, response_model=AccountInfo)
async def update_account(
    account_id: UUID,
    request: UpdateAccountRequest,
    client: ClientInfo = Depends(ClientInfo),
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher=Depends(get_password_hasher),
    audit_sink=Depends(get_audit_sink),
):
    """
    Update Account

    Raises:
        - 400 Bad Request: Owner deactivating their own account
        - 403 Forbidden: Caller is not the company owner
        - 404 Not Found: No such account in the business
        - 409 Conflict: Email already registered
    """
    command = UpdateAccountCommand(
        name=request.name,
        email=request.email,
        password=request.password,
        active=request.active,
    )
    result = await UpdateAccountUseCase(uow, password_hasher, audit_sink).execute(
        principal, account_id, command, client_ip=client.ip, user_agent=client.user_agent
    )
    return unwrap_admin_result(result)


@router.delete("/{account_id}", status_code=status.HTTP_200_OK, response_model=AccountInfo)
async def deactivate_account(
    account_id: UUID,
    client: ClientInfo = Depends(ClientInfo),
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit_sink=Depends(get_audit_sink),
):
    """Soft-deletes an account; its sessions stop authenticating at once."""
    result = await DeactivateAccountUseCase(uow, audit_sink).execute(
        principal, account_id, client_ip=client.ip, user_agent=client.user_agent
    )
    return unwrap_admin_result(result)
