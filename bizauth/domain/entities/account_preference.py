"""
AccountPreference Entity

Per-account UI preferences, returned with every login.
"""

from uuid import UUID, uuid4

from sqlmodel import Field, Index, SQLModel

from .enums import ThemeEnum


class AccountPreference(SQLModel, table=True):
    __tablename__ = "account_preferences"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    business_id: UUID = Field(foreign_key="businesses.id", nullable=False)
    account_id: UUID = Field(foreign_key="accounts.id", nullable=False)

    theme: ThemeEnum = Field(default=ThemeEnum.light)

    __table_args__ = (
        Index("idx_preference_business_account", "business_id", "account_id", unique=True),
    )
