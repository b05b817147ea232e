from typing import List

from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.app.use_cases.owner_guard import require_owner
from bizauth.domain.auth import Principal
from bizauth.libs.result import Result, Return

from .dtos import RoleInfo


class ListRolesUseCase:
    """Active roles of the owner's business, each with its granted routes"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, principal: Principal) -> Result[List[RoleInfo]]:
        async with self.uow:
            owner = await require_owner(self.uow, principal)
            if owner.is_err():
                return owner

            roles = await self.uow.roles.list_active(principal.business_id)
            result = []
            for role in roles:
                routes = await self.uow.route_roles.list_routes_for_roles(
                    principal.business_id, [role.id]
                )
                result.append(RoleInfo.from_entity(role, routes))

            return Return.ok(result)
