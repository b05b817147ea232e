"""
Role Administration DTOs
"""

from typing import List, Optional

from pydantic import BaseModel

from bizauth.domain.entities import Role


class RoleInfo(BaseModel):
    id: str
    name: str
    color: str
    active: bool
    routes: List[str] = []

    @classmethod
    def from_entity(cls, role: Role, routes: Optional[List[str]] = None) -> "RoleInfo":
        return cls(
            id=str(role.id),
            name=role.name,
            color=role.color,
            active=role.active,
            routes=sorted(routes or []),
        )


class AccountRoleInfo(BaseModel):
    account_id: str
    role_id: str
    assigned: bool


class RouteGrantInfo(BaseModel):
    role_id: str
    route: str
    granted: bool
