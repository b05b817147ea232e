"""
Create Role Use Case

Adds a named role to the owner's business.
"""

import re
from typing import Optional

from bizauth.app.services.audit_sink import IAuditSink, record_safely
from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.app.use_cases.owner_guard import require_owner
from bizauth.domain.auth import Principal
from bizauth.domain.entities import AuditContext, AuditEvent, Role
from bizauth.libs.result import Error, Result, Return

from .dtos import RoleInfo

COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")
MIN_NAME_LENGTH = 2
DEFAULT_COLOR = "#6B7280"


def validate_role(name: str, color: str) -> Optional[Error]:
    if len(name) < MIN_NAME_LENGTH:
        return Error("INVALID_ROLE_NAME", "Role name must have at least 2 characters")
    if not COLOR_PATTERN.match(color):
        return Error("INVALID_ROLE_COLOR", "Role color must be a hex value like #1A2B3C")
    return None


class CreateRoleUseCase:
    """
    Business Rules:
    - Only the company owner can create roles
    - Name has at least 2 characters
    - Color is a #RRGGBB hex string
    - Name is unique among the active roles of the business
    - Creates a role_create audit event
    """

    def __init__(self, uow: UnitOfWork, audit_sink: IAuditSink):
        self.uow = uow
        self.audit_sink = audit_sink

    async def execute(
        self,
        principal: Principal,
        name: str,
        color: Optional[str] = None,
        client_ip: str = "unknown",
        user_agent: Optional[str] = None,
    ) -> Result[RoleInfo]:
        name = (name or "").strip()
        color = color or DEFAULT_COLOR

        invalid = validate_role(name, color)
        if invalid is not None:
            return Return.err(invalid)

        async with self.uow:
            owner = await require_owner(self.uow, principal)
            if owner.is_err():
                return owner

            existing = await self.uow.roles.get_active_by_name(principal.business_id, name)
            if existing is not None:
                return Return.err(
                    Error("ROLE_NAME_TAKEN", f"A role named '{name}' already exists")
                )

            role = await self.uow.roles.create(
                Role(business_id=principal.business_id, name=name, color=color.upper())
            )
            await self.uow.commit()

            role_info = RoleInfo.from_entity(role)

        await record_safely(
            self.audit_sink,
            AuditEvent(
                business_id=principal.business_id,
                account_id=principal.account_id,
                context=AuditContext.role_create,
                description=f"Role {name} created",
                ip_address=client_ip,
                user_agent=user_agent,
                additional_data={"role_id": role_info.id, "name": name, "color": role_info.color},
            ),
        )
        return Return.ok(role_info)
