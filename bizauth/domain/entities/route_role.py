"""
RouteRole Entity

Grants a role access to one route of its business.
"""

from uuid import UUID, uuid4

from sqlmodel import Field, Index, SQLModel


class RouteRole(SQLModel, table=True):
    """
    RouteRole entity.

    Business Rules:
    - route is an opaque path matched by exact string equality
    - role.business_id == business_id
    - (business_id, route, role_id) is unique
    """

    __tablename__ = "route_roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    business_id: UUID = Field(foreign_key="businesses.id", nullable=False)
    route: str = Field(max_length=255)
    role_id: UUID = Field(foreign_key="roles.id", nullable=False, index=True)

    __table_args__ = (
        Index("idx_route_role_unique", "business_id", "route", "role_id", unique=True),
    )
