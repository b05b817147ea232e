import pytest
from unittest.mock import AsyncMock, MagicMock

from tests.fakes import FrozenClock

REPOSITORIES = (
    "businesses",
    "accounts",
    "preferences",
    "roles",
    "account_roles",
    "route_roles",
    "sessions",
    "audit_events",
)


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories; every repository method is an AsyncMock"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    for name in REPOSITORIES:
        setattr(uow, name, AsyncMock())
    return uow


@pytest.fixture
def clock():
    return FrozenClock()
