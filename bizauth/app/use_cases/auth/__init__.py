"""
Auth Use Cases

Registration and session context. Login and logout live in AuthGateway.
"""

from .dtos import (
    AccessibleRoutesResponse,
    AccountInfo,
    BusinessInfo,
    LoginResponse,
    LogoutResponse,
    PreferencesInfo,
    RegisterCommand,
    RegisterResponse,
    SessionContextResponse,
)
from .load_context_use_case import LoadContextUseCase
from .register_use_case import RegisterUseCase

__all__ = [
    "AccessibleRoutesResponse",
    "AccountInfo",
    "BusinessInfo",
    "LoginResponse",
    "LogoutResponse",
    "PreferencesInfo",
    "RegisterCommand",
    "RegisterResponse",
    "SessionContextResponse",
    "LoadContextUseCase",
    "RegisterUseCase",
]
