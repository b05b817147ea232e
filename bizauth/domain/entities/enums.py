"""
Domain Enums

Enumeration types shared by entities and use cases.
"""

from enum import Enum


class ThemeEnum(str, Enum):
    """UI theme stored in account preferences"""

    light = "light"
    dark = "dark"


class AuditContext(str, Enum):
    """Category of an audit event"""

    auth_login = "auth_login"
    auth_logout = "auth_logout"
    auth_deny = "auth_deny"
    account_create = "account_create"
    account_update = "account_update"
    account_deactivate = "account_deactivate"
    account_role_add = "account_role_add"
    account_role_remove = "account_role_remove"
    business_create = "business_create"
    role_create = "role_create"
    role_update = "role_update"
    role_delete = "role_delete"
    route_grant = "route_grant"
    route_revoke = "route_revoke"
