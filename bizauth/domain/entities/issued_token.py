"""
IssuedToken Entity

Durable record of every access token handed out at login.
"""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class IssuedToken(SQLModel, table=True):
    """
    IssuedToken entity - one row per login session.

    Business Rules:
    - Only the SHA-256 digest of the token is stored, never the token
    - active flips to False at logout and never back
    - Rows past expires_at are dead regardless of active
    - Only the owning account may deactivate its rows
    """

    __tablename__ = "issued_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    business_id: UUID = Field(foreign_key="businesses.id", nullable=False)
    account_id: UUID = Field(foreign_key="accounts.id", nullable=False, index=True)

    token_digest: str = Field(max_length=64)  # SHA-256 hex
    active: bool = Field(default=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True)),
    )
    expires_at: datetime = Field(sa_column=Column(DateTime(timezone=True)))

    __table_args__ = (
        Index("idx_issued_token_digest", "token_digest"),
        Index("idx_issued_token_expires_at", "expires_at"),
    )
