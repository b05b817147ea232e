"""
Deactivate Role Use Case

Soft-deletes a role. Its AccountRole and RouteRole rows are kept but stop
granting anything, since every permission query filters on active roles.
"""

from typing import Optional
from uuid import UUID

from bizauth.app.services.audit_sink import IAuditSink, record_safely
from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.app.use_cases.owner_guard import require_owner
from bizauth.domain.auth import Principal
from bizauth.domain.entities import AuditContext, AuditEvent
from bizauth.libs.result import Error, Result, Return

from .dtos import RoleInfo


class DeactivateRoleUseCase:
    def __init__(self, uow: UnitOfWork, audit_sink: IAuditSink):
        self.uow = uow
        self.audit_sink = audit_sink

    async def execute(
        self,
        principal: Principal,
        role_id: UUID,
        client_ip: str = "unknown",
        user_agent: Optional[str] = None,
    ) -> Result[RoleInfo]:
        async with self.uow:
            owner = await require_owner(self.uow, principal)
            if owner.is_err():
                return owner

            role = await self.uow.roles.get_active_by_id(role_id, principal.business_id)
            if role is None:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found"))

            role.active = False
            role = await self.uow.roles.update(role)
            await self.uow.commit()

            role_info = RoleInfo.from_entity(role)

        await record_safely(
            self.audit_sink,
            AuditEvent(
                business_id=principal.business_id,
                account_id=principal.account_id,
                context=AuditContext.role_delete,
                description=f"Role {role_info.name} deactivated",
                ip_address=client_ip,
                user_agent=user_agent,
                additional_data={"role_id": role_info.id, "name": role_info.name},
            ),
        )
        return Return.ok(role_info)
