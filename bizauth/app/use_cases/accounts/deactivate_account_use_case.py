from typing import Optional
from uuid import UUID

from bizauth.app.services.audit_sink import IAuditSink, record_safely
from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.app.use_cases.auth.dtos import AccountInfo
from bizauth.app.use_cases.owner_guard import require_owner
from bizauth.domain.auth import Principal
from bizauth.domain.entities import AuditContext, AuditEvent
from bizauth.libs.result import Error, Result, Return

from .update_account_use_case import CANNOT_DEACTIVATE_SELF


class DeactivateAccountUseCase:
    """
    Soft-deletes an account of the business.

    Business Rules:
    - Only the company owner can deactivate accounts
    - The owner cannot deactivate their own account
    - Sessions of the account stop authenticating immediately
    - Creates an account_deactivate audit event
    """

    def __init__(self, uow: UnitOfWork, audit_sink: IAuditSink):
        self.uow = uow
        self.audit_sink = audit_sink

    async def execute(
        self,
        principal: Principal,
        account_id: UUID,
        client_ip: str = "unknown",
        user_agent: Optional[str] = None,
    ) -> Result[AccountInfo]:
        if account_id == principal.account_id:
            return Return.err(CANNOT_DEACTIVATE_SELF)

        async with self.uow:
            owner = await require_owner(self.uow, principal)
            if owner.is_err():
                return owner

            account = await self.uow.accounts.get_in_business(account_id, principal.business_id)
            if account is None:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "Account not found"))

            account.active = False
            account = await self.uow.accounts.update(account)
            await self.uow.commit()

            account_info = AccountInfo.from_entity(account)

        await record_safely(
            self.audit_sink,
            AuditEvent(
                business_id=principal.business_id,
                account_id=principal.account_id,
                context=AuditContext.account_deactivate,
                description=f"Account {account_info.name} ({account_info.email}) deactivated",
                ip_address=client_ip,
                user_agent=user_agent,
                additional_data={
                    "target_account_id": account_info.id,
                    "email": account_info.email,
                },
            ),
        )
        return Return.ok(account_info)
