"""
Account Administration DTOs
"""

from typing import Optional

from pydantic import BaseModel


class CreateAccountCommand(BaseModel):
    """Owner's intent to add a regular account to the business"""

    name: str
    email: str
    password: str


class UpdateAccountCommand(BaseModel):
    """Fields left as None are not changed"""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    active: Optional[bool] = None
