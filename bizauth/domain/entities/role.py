"""
Role Entity

Named bundle of route grants, scoped to one business.
"""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class Role(SQLModel, table=True):
    """
    Role entity - never shared across businesses.

    Business Rules:
    - (business_id, name) is unique among active roles
    - Soft delete through active=False; an inactive role grants nothing
      even while its AccountRole / RouteRole rows remain
    """

    __tablename__ = "roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    business_id: UUID = Field(foreign_key="businesses.id", nullable=False, index=True)

    name: str = Field(max_length=100)
    color: str = Field(default="#6B7280", max_length=7)
    active: bool = Field(default=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True)),
    )

    __table_args__ = (Index("idx_role_business_active", "business_id", "active"),)
