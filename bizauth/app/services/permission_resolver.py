"""
Permission Resolver

Decides whether an account may open a route of its business.

Decision procedure (first match wins):
1. account missing from the business or inactive -> denied
2. company owner -> authorized, no role lookup performed
3. profile route or one of its sub-paths -> authorized
4. no active role held in the business -> denied
5. a RouteRole of the business grants the exact route to a held role
   -> authorized, otherwise denied

Inactive roles are filtered out by the role repository, so their leftover
RouteRole rows grant nothing. Every lookup is scoped by business_id.

Operates on an already entered UnitOfWork.
"""

from typing import Set
from uuid import UUID

from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.domain.auth import AccessDecision, AccessReason
from bizauth.domain.routes import PROFILE_ROUTE, ROUTE_CATALOGUE, is_profile_route


class PermissionResolver:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def can_access(
        self, account_id: UUID, business_id: UUID, route: str
    ) -> AccessDecision:
        account = await self.uow.accounts.get_in_business(account_id, business_id)
        if account is None or not account.active:
            return AccessDecision.denied(route, AccessReason.unknown_principal)

        if account.is_company_owner:
            return AccessDecision.authorized(route, AccessReason.owner)

        if is_profile_route(route):
            return AccessDecision.authorized(route, AccessReason.profile)

        role_ids = await self.uow.roles.get_active_role_ids_for_account(
            account_id, business_id
        )
        if not role_ids:
            return AccessDecision.denied(route, AccessReason.no_roles)

        granted = await self.uow.route_roles.exists_for_roles(business_id, route, role_ids)
        if granted:
            return AccessDecision.authorized(route, AccessReason.role_grant)
        return AccessDecision.denied(route, AccessReason.no_grant)

    async def list_accessible_routes(
        self, account_id: UUID, business_id: UUID
    ) -> Set[str]:
        account = await self.uow.accounts.get_in_business(account_id, business_id)
        if account is None or not account.active:
            return set()

        if account.is_company_owner:
            return set(ROUTE_CATALOGUE)

        role_ids = await self.uow.roles.get_active_role_ids_for_account(
            account_id, business_id
        )
        if not role_ids:
            return {PROFILE_ROUTE}

        routes = set(
            await self.uow.route_roles.list_routes_for_roles(business_id, role_ids)
        )
        routes.add(PROFILE_ROUTE)
        return routes
