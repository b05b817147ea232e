"""
Account Role Use Cases

Assign a role to an account of the same business, or take it away.
"""

from typing import Optional
from uuid import UUID

from bizauth.app.services.audit_sink import IAuditSink, record_safely
from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.app.use_cases.owner_guard import require_owner
from bizauth.domain.auth import Principal
from bizauth.domain.entities import AccountRole, AuditContext, AuditEvent
from bizauth.libs.result import Error, Result, Return

from .dtos import AccountRoleInfo


class AssignAccountRoleUseCase:
    """
    Business Rules:
    - Only the company owner can assign roles
    - Target account and role belong to the owner's business
    - Role must be active
    - Assigning the same role twice is rejected
    - Creates an account_role_add audit event
    """

    def __init__(self, uow: UnitOfWork, audit_sink: IAuditSink):
        self.uow = uow
        self.audit_sink = audit_sink

    async def execute(
        self,
        principal: Principal,
        account_id: UUID,
        role_id: UUID,
        client_ip: str = "unknown",
        user_agent: Optional[str] = None,
    ) -> Result[AccountRoleInfo]:
        business_id = principal.business_id

        async with self.uow:
            owner = await require_owner(self.uow, principal)
            if owner.is_err():
                return owner

            account = await self.uow.accounts.get_in_business(account_id, business_id)
            if account is None:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "Account not found"))

            role = await self.uow.roles.get_active_by_id(role_id, business_id)
            if role is None:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found"))

            if await self.uow.account_roles.get(business_id, account_id, role_id):
                return Return.err(
                    Error("ROLE_ALREADY_ASSIGNED", "Account already has this role")
                )

            await self.uow.account_roles.create(
                AccountRole(business_id=business_id, account_id=account_id, role_id=role_id)
            )
            await self.uow.commit()

            role_name = role.name

        await record_safely(
            self.audit_sink,
            AuditEvent(
                business_id=business_id,
                account_id=principal.account_id,
                context=AuditContext.account_role_add,
                description=f"Role {role_name} assigned",
                ip_address=client_ip,
                user_agent=user_agent,
                additional_data={"target_account_id": str(account_id), "role_id": str(role_id)},
            ),
        )
        return Return.ok(
            AccountRoleInfo(account_id=str(account_id), role_id=str(role_id), assigned=True)
        )


class RemoveAccountRoleUseCase:
    """
    Business Rules:
    - Only the company owner can remove roles
    - The assignment must exist in the owner's business
    - Creates an account_role_remove audit event
    """

    def __init__(self, uow: UnitOfWork, audit_sink: IAuditSink):
        self.uow = uow
        self.audit_sink = audit_sink

    async def execute(
        self,
        principal: Principal,
        account_id: UUID,
        role_id: UUID,
        client_ip: str = "unknown",
        user_agent: Optional[str] = None,
    ) -> Result[AccountRoleInfo]:
        business_id = principal.business_id

        async with self.uow:
            owner = await require_owner(self.uow, principal)
            if owner.is_err():
                return owner

            removed = await self.uow.account_roles.delete(business_id, account_id, role_id)
            if not removed:
                return Return.err(
                    Error("ASSIGNMENT_NOT_FOUND", "Account does not have this role")
                )
            await self.uow.commit()

        await record_safely(
            self.audit_sink,
            AuditEvent(
                business_id=business_id,
                account_id=principal.account_id,
                context=AuditContext.account_role_remove,
                description="Role removed from account",
                ip_address=client_ip,
                user_agent=user_agent,
                additional_data={"target_account_id": str(account_id), "role_id": str(role_id)},
            ),
        )
        return Return.ok(
            AccountRoleInfo(account_id=str(account_id), role_id=str(role_id), assigned=False)
        )
