"""
Create Account Use Case

Adds a regular (non-owner) account to the owner's business.
"""

from typing import Optional

from bizauth.app.services.audit_sink import IAuditSink, record_safely
from bizauth.app.services.password_hasher import IPasswordHasher
from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.app.use_cases.auth.dtos import AccountInfo
from bizauth.app.use_cases.owner_guard import require_owner
from bizauth.domain.auth import Principal
from bizauth.domain.entities import (
    Account,
    AccountPreference,
    AuditContext,
    AuditEvent,
    ThemeEnum,
)
from bizauth.libs.result import Error, Result, Return

from .dtos import CreateAccountCommand


class CreateAccountUseCase:
    """
    Business Rules:
    - Only the company owner can create accounts
    - Email is stored lowercased and must not be used by any account,
      since login looks accounts up by email alone
    - New accounts are never company owners and hold no roles
    - Default preferences are created with the account
    - Creates an account_create audit event
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
        command: CreateAccountCommand,
        client_ip: str = "unknown",
        user_agent: Optional[str] = None,
    ) -> Result[AccountInfo]:
        email = command.email.strip().lower()
        business_id = principal.business_id

        async with self.uow:
            owner = await require_owner(self.uow, principal)
            if owner.is_err():
                return owner

            if await self.uow.accounts.get_by_email(email):
                return Return.err(Error("EMAIL_ALREADY_EXISTS", "Email already registered"))

            account = await self.uow.accounts.create(
                Account(
                    business_id=business_id,
                    email=email,
                    name=command.name.strip(),
                    password_hash=self.password_hasher.hash(command.password),
                )
            )
            await self.uow.preferences.create(
                AccountPreference(
                    business_id=business_id, account_id=account.id, theme=ThemeEnum.light
                )
            )
            await self.uow.commit()

            account_info = AccountInfo.from_entity(account)

        await record_safely(
            self.audit_sink,
            AuditEvent(
                business_id=business_id,
                account_id=principal.account_id,
                context=AuditContext.account_create,
                description=f"Account created: {account_info.name} ({account_info.email})",
                ip_address=client_ip,
                user_agent=user_agent,
                additional_data={
                    "target_account_id": account_info.id,
                    "email": account_info.email,
                    "name": account_info.name,
                },
            ),
        )
        return Return.ok(account_info)
