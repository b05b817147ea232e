"""
Authentication Use Case DTOs (Data Transfer Objects)

Command and Response classes for the auth domain.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from bizauth.domain.entities import Account, AccountPreference, Business


# ============================================================================
# Commands
# ============================================================================


class RegisterCommand(BaseModel):
    """Validated intent to open a new business with its owner account"""

    business_name: str
    business_document: str
    name: str
    email: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class AccountInfo(BaseModel):
    """Account details safe to return to clients (no password hash)"""

    id: str
    business_id: str
    email: str
    name: str
    photo_profile: Optional[str] = None
    is_company_owner: bool
    active: bool

    @classmethod
    def from_entity(cls, account: Account) -> "AccountInfo":
        return cls(
            id=str(account.id),
            business_id=str(account.business_id),
            email=account.email,
            name=account.name,
            photo_profile=account.photo_profile,
            is_company_owner=account.is_company_owner,
            active=account.active,
        )


class BusinessInfo(BaseModel):
    id: str
    name: str
    document: str
    active: bool

    @classmethod
    def from_entity(cls, business: Business) -> "BusinessInfo":
        return cls(
            id=str(business.id),
            name=business.name,
            document=business.document,
            active=business.active,
        )


class PreferencesInfo(BaseModel):
    theme: str

    @classmethod
    def from_entity(cls, preference: AccountPreference) -> "PreferencesInfo":
        return cls(theme=preference.theme.value)


class LoginResponse(BaseModel):
    """Response for a successful login"""

    token: str
    expires_at: datetime
    account: AccountInfo
    business: BusinessInfo
    preferences: PreferencesInfo


class SessionContextResponse(BaseModel):
    """Response for GET /auth/me"""

    account: AccountInfo
    business: BusinessInfo
    preferences: PreferencesInfo


class RegisterResponse(BaseModel):
    """Response for business registration"""

    message: str
    account: AccountInfo
    business: BusinessInfo
    preferences: PreferencesInfo


class AccessibleRoutesResponse(BaseModel):
    routes: List[str]
    account_id: str
    business_id: str


class LogoutResponse(BaseModel):
    message: str
    deactivated_sessions: int
