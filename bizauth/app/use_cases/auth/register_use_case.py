import logging
from typing import Optional

from bizauth.app.services.audit_sink import IAuditSink, record_safely
from bizauth.app.services.password_hasher import IPasswordHasher
from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.domain.entities import (
    Account,
    AccountPreference,
    AuditContext,
    AuditEvent,
    Business,
    ThemeEnum,
)
from bizauth.libs.result import Error, Result, Return

from .dtos import (
    AccountInfo,
    BusinessInfo,
    PreferencesInfo,
    RegisterCommand,
    RegisterResponse,
)

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[RegisterResponse]

    Business Logic:
    1. Reject a business document that is already registered
    2. Reject an email already used by any account
    3. Create Business, owner Account (is_company_owner=True) and default
       preferences in one transaction
    4. Record business_create and account_create audit events

    No session is opened; the owner logs in afterwards.
    """

    def __init__(
        self, uow: UnitOfWork, password_hasher: IPasswordHasher, audit_sink: IAuditSink
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.audit_sink = audit_sink

    async def execute(
        self,
        command: RegisterCommand,
        client_ip: str = "unknown",
        user_agent: Optional[str] = None,
    ) -> Result[RegisterResponse]:
        email = command.email.strip().lower()
        document = command.business_document.strip()

        async with self.uow:
            if await self.uow.businesses.get_by_document(document):
                return Return.err(
                    Error("DOCUMENT_ALREADY_EXISTS", "Business document already registered")
                )

            if await self.uow.accounts.get_by_email(email):
                return Return.err(Error("EMAIL_ALREADY_EXISTS", "Email already registered"))

            business = await self.uow.businesses.create(
                Business(name=command.business_name.strip(), document=document)
            )

            account = await self.uow.accounts.create(
                Account(
                    business_id=business.id,
                    email=email,
                    name=command.name.strip(),
                    password_hash=self.password_hasher.hash(command.password),
                    is_company_owner=True,
                )
            )

            preference = await self.uow.preferences.create(
                AccountPreference(
                    business_id=business.id,
                    account_id=account.id,
                    theme=ThemeEnum.light,
                )
            )

            await self.uow.commit()

            response = RegisterResponse(
                message="Business registered successfully",
                account=AccountInfo.from_entity(account),
                business=BusinessInfo.from_entity(business),
                preferences=PreferencesInfo.from_entity(preference),
            )

        await record_safely(
            self.audit_sink,
            AuditEvent(
                business_id=business.id,
                account_id=account.id,
                context=AuditContext.business_create,
                description=f"Business {business.name} created",
                ip_address=client_ip,
                user_agent=user_agent,
                additional_data={"document": business.document},
            ),
        )
        await record_safely(
            self.audit_sink,
            AuditEvent(
                business_id=business.id,
                account_id=account.id,
                context=AuditContext.account_create,
                description="Owner account created",
                ip_address=client_ip,
                user_agent=user_agent,
                additional_data={"email": account.email, "is_company_owner": True},
            ),
        )

        logger.info(f"Registered business {business.id} with owner account {account.id}")
        return Return.ok(response)
