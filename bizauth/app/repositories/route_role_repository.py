from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from bizauth.domain.entities import RouteRole


class IRouteRoleRepository(ABC):
    """RouteRole repository interface - application layer"""

    @abstractmethod
    async def exists_for_roles(
        self, business_id: UUID, route: str, role_ids: Sequence[UUID]
    ) -> bool:
        """True if any of the roles is granted the exact route in the business"""
        pass

    @abstractmethod
    async def list_routes_for_roles(
        self, business_id: UUID, role_ids: Sequence[UUID]
    ) -> List[str]:
        """Distinct routes granted to any of the roles in the business"""
        pass

    @abstractmethod
    async def get(
        self, business_id: UUID, route: str, role_id: UUID
    ) -> Optional[RouteRole]:
        """Get a single route grant"""
        pass

    @abstractmethod
    async def create(self, route_role: RouteRole) -> RouteRole:
        """Grant a role access to a route"""
        pass

    @abstractmethod
    async def delete(self, business_id: UUID, route: str, role_id: UUID) -> bool:
        """Remove a route grant. Returns True if a row was deleted."""
        pass
