"""
Account Entity

A login identity inside one business.
"""

from datetime import UTC, datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

if TYPE_CHECKING:
    from .business import Business


class Account(SQLModel, table=True):
    """
    Account entity - belongs to exactly one business.

    Business Rules:
    - Email is stored lowercased
    - Soft delete through active=False
    - is_company_owner accounts bypass route permission checks
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    business_id: UUID = Field(foreign_key="businesses.id", nullable=False, index=True)

    email: str = Field(index=True, max_length=255)
    name: str = Field(max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output
    photo_profile: Optional[str] = Field(default=None, max_length=512)

    active: bool = Field(default=True)
    is_company_owner: bool = Field(default=False)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True)),
    )

    business: Optional["Business"] = Relationship(back_populates="accounts")

    __table_args__ = (Index("idx_account_business_active", "business_id", "active"),)
