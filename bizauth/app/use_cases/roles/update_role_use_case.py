"""
Update Role Use Case

Renames or recolors an active role of the owner's business.
"""

from typing import Optional
from uuid import UUID

from bizauth.app.services.audit_sink import IAuditSink, record_safely
from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.app.use_cases.owner_guard import require_owner
from bizauth.domain.auth import Principal
from bizauth.domain.entities import AuditContext, AuditEvent
from bizauth.libs.result import Error, Result, Return

from .create_role_use_case import validate_role
from .dtos import RoleInfo


class UpdateRoleUseCase:
    """
    Business Rules:
    - Only the company owner can edit roles
    - Same name and color rules as role creation
    - The new name must not belong to another active role
    - Creates a role_update audit event with old and new values
    """

    def __init__(self, uow: UnitOfWork, audit_sink: IAuditSink):
        self.uow = uow
        self.audit_sink = audit_sink

    async def execute(
        self,
        principal: Principal,
        role_id: UUID,
        name: str,
        color: str,
        client_ip: str = "unknown",
        user_agent: Optional[str] = None,
    ) -> Result[RoleInfo]:
        name = (name or "").strip()
        color = color or ""

        invalid = validate_role(name, color)
        if invalid is not None:
            return Return.err(invalid)

        business_id = principal.business_id

        async with self.uow:
            owner = await require_owner(self.uow, principal)
            if owner.is_err():
                return owner

            role = await self.uow.roles.get_active_by_id(role_id, business_id)
            if role is None:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found"))

            same_name = await self.uow.roles.get_active_by_name(business_id, name)
            if same_name is not None and same_name.id != role.id:
                return Return.err(
                    Error("ROLE_NAME_TAKEN", f"A role named '{name}' already exists")
                )

            old_name, old_color = role.name, role.color
            role.name = name
            role.color = color.upper()
            role = await self.uow.roles.update(role)
            await self.uow.commit()

            routes = await self.uow.route_roles.list_routes_for_roles(business_id, [role.id])
            role_info = RoleInfo.from_entity(role, routes)

        await record_safely(
            self.audit_sink,
            AuditEvent(
                business_id=business_id,
                account_id=principal.account_id,
                context=AuditContext.role_update,
                description=f"Role {old_name} updated to {role_info.name}",
                ip_address=client_ip,
                user_agent=user_agent,
                additional_data={
                    "role_id": role_info.id,
                    "old_name": old_name,
                    "new_name": role_info.name,
                    "old_color": old_color,
                    "new_color": role_info.color,
                },
            ),
        )
        return Return.ok(role_info)
