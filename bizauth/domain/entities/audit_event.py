"""
AuditEvent Entity

Immutable log of security-relevant events of a business.
"""

from datetime import UTC, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from .enums import AuditContext


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - append only.

    Business Rules:
    - Never updated or deleted
    - account_id is null for events without a known actor
    - additional_data stores free-form context (email, role name, ...)
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    business_id: UUID = Field(index=True)
    account_id: Optional[UUID] = Field(default=None, index=True)

    context: AuditContext = Field(nullable=False)
    description: str = Field(max_length=500)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)
    additional_data: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True)),
    )

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_business_context", "business_id", "context"),
    )
