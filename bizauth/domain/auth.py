"""
Authentication Value Objects

Per-request identities and decisions. None of these are persisted.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class Principal(BaseModel):
    """Identity established for one request from a verified token"""

    model_config = ConfigDict(frozen=True)

    account_id: UUID
    business_id: UUID
    email: str


class VerifiedClaims(BaseModel):
    """
    Token payload whose signature and expiry have been checked.

    Only TokenCodec.verify produces this type; authorization code accepts
    nothing else.
    """

    model_config = ConfigDict(frozen=True)

    account_id: UUID
    business_id: UUID
    email: str
    token_id: str
    issued_at: datetime
    expires_at: datetime

    def to_principal(self) -> Principal:
        return Principal(
            account_id=self.account_id,
            business_id=self.business_id,
            email=self.email,
        )


class UnverifiedClaims(BaseModel):
    """
    Token payload parsed WITHOUT signature verification.

    Good for expiry introspection only (e.g. blacklist TTL). Making an
    authorization decision from this type is a bug.
    """

    model_config = ConfigDict(frozen=True)

    account_id: Optional[str] = None
    business_id: Optional[str] = None
    expires_at: Optional[datetime] = None


class AccessReason(str, Enum):
    """Why the PermissionResolver reached its decision"""

    owner = "owner"
    profile = "profile"
    role_grant = "role_grant"
    unknown_principal = "unknown_principal"
    no_roles = "no_roles"
    no_grant = "no_grant"


class AccessDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: AccessReason
    route: str

    @classmethod
    def authorized(cls, route: str, reason: AccessReason) -> "AccessDecision":
        return cls(allowed=True, reason=reason, route=route)

    @classmethod
    def denied(cls, route: str, reason: AccessReason) -> "AccessDecision":
        return cls(allowed=False, reason=reason, route=route)
