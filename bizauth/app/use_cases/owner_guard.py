from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.domain.auth import Principal
from bizauth.domain.entities import Account
from bizauth.libs.result import Error, Result, Return


async def require_owner(uow: UnitOfWork, principal: Principal) -> Result[Account]:
    """Role and account administration is reserved to the company owner."""
    account = await uow.accounts.get_in_business(
        principal.account_id, principal.business_id
    )
    if account is None or not account.active:
        return Return.err(Error("ACCOUNT_NOT_FOUND", "Account not found"))

    if not account.is_company_owner:
        return Return.err(
            Error("INSUFFICIENT_ROLE", "Only the company owner can perform this action")
        )

    return Return.ok(account)
