"""
Load Context Use Case

Returns the account, business and preferences behind an authenticated
principal (GET /auth/me).
"""

from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.domain.auth import Principal
from bizauth.domain.entities import AccountPreference, ThemeEnum
from bizauth.libs.result import Error, Result, Return

from .dtos import AccountInfo, BusinessInfo, PreferencesInfo, SessionContextResponse


class LoadContextUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, principal: Principal) -> Result[SessionContextResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_in_business(
                principal.account_id, principal.business_id
            )
            if account is None or not account.active:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "Account not found"))

            business = await self.uow.businesses.get_by_id(principal.business_id)
            if business is None:
                return Return.err(Error("BUSINESS_NOT_FOUND", "Business not found"))

            preference = await self.uow.preferences.get_by_account(
                business.id, account.id
            )
            if preference is None:
                # Not persisted here; login creates the row
                preference = AccountPreference(
                    business_id=business.id, account_id=account.id, theme=ThemeEnum.light
                )

            return Return.ok(
                SessionContextResponse(
                    account=AccountInfo.from_entity(account),
                    business=BusinessInfo.from_entity(business),
                    preferences=PreferencesInfo.from_entity(preference),
                )
            )
