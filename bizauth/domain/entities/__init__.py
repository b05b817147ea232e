"""
Domain Entities

One SQLModel table per file.
"""

from .enums import AuditContext, ThemeEnum

from .business import Business
from .account import Account
from .account_preference import AccountPreference
from .role import Role
from .account_role import AccountRole
from .route_role import RouteRole
from .issued_token import IssuedToken
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "AuditContext",
    "ThemeEnum",
    # Entities
    "Business",
    "Account",
    "AccountPreference",
    "Role",
    "AccountRole",
    "RouteRole",
    "IssuedToken",
    "AuditEvent",
]
