from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from bizauth.app.repositories.route_role_repository import IRouteRoleRepository
from bizauth.domain.entities import RouteRole


class RouteRoleRepository(IRouteRoleRepository):
    """RouteRole repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists_for_roles(
        self, business_id: UUID, route: str, role_ids: Sequence[UUID]
    ) -> bool:
        if not role_ids:
            return False
        stmt = (
            select(RouteRole.id)
            .where(
                RouteRole.business_id == business_id,
                RouteRole.route == route,
                RouteRole.role_id.in_(list(role_ids)),
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first() is not None

    async def list_routes_for_roles(
        self, business_id: UUID, role_ids: Sequence[UUID]
    ) -> List[str]:
        if not role_ids:
            return []
        stmt = (
            select(RouteRole.route)
            .where(
                RouteRole.business_id == business_id,
                RouteRole.role_id.in_(list(role_ids)),
            )
            .distinct()
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get(
        self, business_id: UUID, route: str, role_id: UUID
    ) -> Optional[RouteRole]:
        stmt = select(RouteRole).where(
            RouteRole.business_id == business_id,
            RouteRole.route == route,
            RouteRole.role_id == role_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, route_role: RouteRole) -> RouteRole:
        self.session.add(route_role)
        await self.session.flush()
        await self.session.refresh(route_role)
        return route_role

    async def delete(self, business_id: UUID, route: str, role_id: UUID) -> bool:
        stmt = delete(RouteRole).where(
            RouteRole.business_id == business_id,
            RouteRole.route == route,
            RouteRole.role_id == role_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
