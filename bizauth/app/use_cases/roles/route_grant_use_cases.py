"""
Route Grant Use Cases

Grant a role access to a route of the catalogue, or revoke it. Grants are
exact route strings.
"""

from typing import Optional
from uuid import UUID

from bizauth.app.services.audit_sink import IAuditSink, record_safely
from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.app.use_cases.owner_guard import require_owner
from bizauth.domain.auth import Principal
from bizauth.domain.entities import AuditContext, AuditEvent, RouteRole
from bizauth.domain.routes import KNOWN_ROUTES
from bizauth.libs.result import Error, Result, Return

from .dtos import RouteGrantInfo


class GrantRouteUseCase:
    def __init__(self, uow: UnitOfWork, audit_sink: IAuditSink):
        self.uow = uow
        self.audit_sink = audit_sink

    async def execute(
        self,
        principal: Principal,
        role_id: UUID,
        route: str,
        client_ip: str = "unknown",
        user_agent: Optional[str] = None,
    ) -> Result[RouteGrantInfo]:
        if route not in KNOWN_ROUTES:
            return Return.err(Error("UNKNOWN_ROUTE", f"Unknown route: {route}"))

        business_id = principal.business_id

        async with self.uow:
            owner = await require_owner(self.uow, principal)
            if owner.is_err():
                return owner

            role = await self.uow.roles.get_active_by_id(role_id, business_id)
            if role is None:
                return Return.err(Error("ROLE_NOT_FOUND", "Role not found"))

            if await self.uow.route_roles.get(business_id, route, role_id):
                return Return.err(
                    Error("ROUTE_ALREADY_GRANTED", "Role already has access to this route")
                )

            await self.uow.route_roles.create(
                RouteRole(business_id=business_id, route=route, role_id=role_id)
            )
            await self.uow.commit()

            role_name = role.name

        await record_safely(
            self.audit_sink,
            AuditEvent(
                business_id=business_id,
                account_id=principal.account_id,
                context=AuditContext.route_grant,
                description=f"Route {route} granted to role {role_name}",
                ip_address=client_ip,
                user_agent=user_agent,
                additional_data={"role_id": str(role_id), "route": route, "granted": True},
            ),
        )
        return Return.ok(RouteGrantInfo(role_id=str(role_id), route=route, granted=True))


class RevokeRouteUseCase:
    def __init__(self, uow: UnitOfWork, audit_sink: IAuditSink):
        self.uow = uow
        self.audit_sink = audit_sink

    async def execute(
        self,
        principal: Principal,
        role_id: UUID,
        route: str,
        client_ip: str = "unknown",
        user_agent: Optional[str] = None,
    ) -> Result[RouteGrantInfo]:
        business_id = principal.business_id

        async with self.uow:
            owner = await require_owner(self.uow, principal)
            if owner.is_err():
                return owner

            removed = await self.uow.route_roles.delete(business_id, route, role_id)
            if not removed:
                return Return.err(Error("GRANT_NOT_FOUND", "Role has no access to this route"))
            await self.uow.commit()

        await record_safely(
            self.audit_sink,
            AuditEvent(
                business_id=business_id,
                account_id=principal.account_id,
                context=AuditContext.route_revoke,
                description=f"Route {route} revoked from role",
                ip_address=client_ip,
                user_agent=user_agent,
                additional_data={"role_id": str(role_id), "route": route, "granted": False},
            ),
        )
        return Return.ok(RouteGrantInfo(role_id=str(role_id), route=route, granted=False))
