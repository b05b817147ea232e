from typing import List

from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.app.use_cases.auth.dtos import AccountInfo
from bizauth.app.use_cases.owner_guard import require_owner
from bizauth.domain.auth import Principal
from bizauth.libs.result import Result, Return


class ListAccountsUseCase:
    """Every account of the owner's business, deactivated ones included"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, principal: Principal) -> Result[List[AccountInfo]]:
        async with self.uow:
            owner = await require_owner(self.uow, principal)
            if owner.is_err():
                return owner

            accounts = await self.uow.accounts.list_by_business(principal.business_id)
            return Return.ok([AccountInfo.from_entity(account) for account in accounts])
