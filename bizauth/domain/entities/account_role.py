"""
AccountRole Entity

Many-to-many link between accounts and roles inside one business.
"""

from uuid import UUID, uuid4

from sqlmodel import Field, Index, SQLModel


class AccountRole(SQLModel, table=True):
    """
    AccountRole entity.

    Business Rules:
    - Account, role and the row itself belong to the same business
    - (business_id, account_id, role_id) is unique
    """

    __tablename__ = "account_roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    business_id: UUID = Field(foreign_key="businesses.id", nullable=False)
    account_id: UUID = Field(foreign_key="accounts.id", nullable=False, index=True)
    role_id: UUID = Field(foreign_key="roles.id", nullable=False, index=True)

    __table_args__ = (
        Index(
            "idx_account_role_unique", "business_id", "account_id", "role_id", unique=True
        ),
    )
