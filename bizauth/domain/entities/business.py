"""
Business Entity

The tenant: every account, role and grant belongs to exactly one business.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

if TYPE_CHECKING:
    from .account import Account


class Business(SQLModel, table=True):
    """
    Business entity - isolated tenant workspace.

    Business Rules:
    - Document (tax id) is unique across businesses
    - An inactive business invalidates every session of its accounts
    """

    __tablename__ = "businesses"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    document: str = Field(max_length=32, unique=True)
    active: bool = Field(default=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True)),
    )

    accounts: list["Account"] = Relationship(back_populates="business")

    __table_args__ = (Index("idx_business_active", "active"),)
