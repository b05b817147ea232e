"""
Role Administration Use Cases

All owner-only role, account-role and route-grant management.
"""

from .account_role_use_cases import AssignAccountRoleUseCase, RemoveAccountRoleUseCase
from .create_role_use_case import CreateRoleUseCase
from .deactivate_role_use_case import DeactivateRoleUseCase
from .list_roles_use_case import ListRolesUseCase
from .route_grant_use_cases import GrantRouteUseCase, RevokeRouteUseCase
from .update_role_use_case import UpdateRoleUseCase

__all__ = [
    "AssignAccountRoleUseCase",
    "RemoveAccountRoleUseCase",
    "CreateRoleUseCase",
    "DeactivateRoleUseCase",
    "ListRolesUseCase",
    "GrantRouteUseCase",
    "RevokeRouteUseCase",
    "UpdateRoleUseCase",
]
