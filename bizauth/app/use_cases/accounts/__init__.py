"""
Account Administration Use Cases

Owner-only management of the accounts of a business.
"""

from .create_account_use_case import CreateAccountUseCase
from .deactivate_account_use_case import DeactivateAccountUseCase
from .dtos import CreateAccountCommand, UpdateAccountCommand
from .list_accounts_use_case import ListAccountsUseCase
from .update_account_use_case import UpdateAccountUseCase

__all__ = [
    "CreateAccountCommand",
    "UpdateAccountCommand",
    "CreateAccountUseCase",
    "DeactivateAccountUseCase",
    "ListAccountsUseCase",
    "UpdateAccountUseCase",
]
