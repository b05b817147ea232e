"""
Update Account Use Case

Changes name, email, password or status of an account of the business.
Deactivating an account ends all of its sessions, since session checks
require an active account.
"""

from typing import List, Optional
from uuid import UUID

from bizauth.app.services.audit_sink import IAuditSink, record_safely
from bizauth.app.services.password_hasher import IPasswordHasher
from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.app.use_cases.auth.dtos import AccountInfo
from bizauth.app.use_cases.owner_guard import require_owner
from bizauth.domain.auth import Principal
from bizauth.domain.entities import AuditContext, AuditEvent
from bizauth.libs.result import Error, Result, Return

from .dtos import UpdateAccountCommand

CANNOT_DEACTIVATE_SELF = Error(
    "CANNOT_DEACTIVATE_SELF", "You cannot deactivate your own account"
)


class UpdateAccountUseCase:
    """
    Business Rules:
    - Only the company owner can update accounts of the business
    - The owner cannot deactivate their own account
    - A new email must not be used by another account
    - A request that changes nothing succeeds without an audit event
    - Creates an account_update audit event listing the changed fields
    """

    def __init__(
        self, uow: UnitOfWork, password_hasher: IPasswordHasher, audit_sink: IAuditSink
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.audit_sink = audit_sink

    async def execute(
        self,
        principal: Principal,
        account_id: UUID,
        command: UpdateAccountCommand,
        client_ip: str = "unknown",
        user_agent: Optional[str] = None,
    ) -> Result[AccountInfo]:
        business_id = principal.business_id

        if account_id == principal.account_id and command.active is False:
            return Return.err(CANNOT_DEACTIVATE_SELF)

        async with self.uow:
            owner = await require_owner(self.uow, principal)
            if owner.is_err():
                return owner

            account = await self.uow.accounts.get_in_business(account_id, business_id)
            if account is None:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "Account not found"))

            changed: List[str] = []

            if command.name is not None and command.name.strip() != account.name:
                account.name = command.name.strip()
                changed.append("name")

            if command.email is not None:
                email = command.email.strip().lower()
                if email != account.email:
                    holder = await self.uow.accounts.get_by_email(email)
                    if holder is not None and holder.id != account.id:
                        return Return.err(
                            Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                        )
                    account.email = email
                    changed.append("email")

            if command.active is not None and command.active != account.active:
                account.active = command.active
                changed.append("active")

            if command.password:
                account.password_hash = self.password_hasher.hash(command.password)
                changed.append("password")

            if not changed:
                return Return.ok(AccountInfo.from_entity(account))

            account = await self.uow.accounts.update(account)
            await self.uow.commit()

            account_info = AccountInfo.from_entity(account)

        await record_safely(
            self.audit_sink,
            AuditEvent(
                business_id=business_id,
                account_id=principal.account_id,
                context=AuditContext.account_update,
                description=f"Account {account_info.name} updated: {', '.join(changed)}",
                ip_address=client_ip,
                user_agent=user_agent,
                additional_data={
                    "target_account_id": account_info.id,
                    "email": account_info.email,
                    "fields_updated": changed,
                },
            ),
        )
        return Return.ok(account_info)
