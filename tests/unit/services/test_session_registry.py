from uuid import uuid4

import pytest
from unittest.mock import AsyncMock

from bizauth.app.services.session_registry import SessionRegistry
from bizauth.domain.entities import IssuedToken


@pytest.mark.asyncio
async def test_create_records_an_active_session(mock_uow, clock):
    mock_uow.sessions.create = AsyncMock(side_effect=lambda record: record)
    registry = SessionRegistry(mock_uow, clock)
    business_id, account_id = uuid4(), uuid4()

    record = await registry.create(business_id, account_id, "d" * 64, clock.now())

    assert record.active is True
    assert record.business_id == business_id
    assert record.account_id == account_id
    assert record.token_digest == "d" * 64


@pytest.mark.asyncio
async def test_is_active_looks_up_live_records_at_current_time(mock_uow, clock):
    account_id = uuid4()
    mock_uow.sessions.find_live.return_value = IssuedToken(
        business_id=uuid4(), account_id=account_id, token_digest="d" * 64, expires_at=clock.now()
    )
    registry = SessionRegistry(mock_uow, clock)

    assert await registry.is_active("d" * 64, account_id) is True
    mock_uow.sessions.find_live.assert_awaited_once_with("d" * 64, account_id, clock.now())


@pytest.mark.asyncio
async def test_is_active_false_without_live_record(mock_uow, clock):
    mock_uow.sessions.find_live.return_value = None

    assert await SessionRegistry(mock_uow, clock).is_active("d" * 64, uuid4()) is False


@pytest.mark.asyncio
async def test_deactivate_is_scoped_by_account(mock_uow, clock):
    account_id = uuid4()
    mock_uow.sessions.deactivate.return_value = 1

    count = await SessionRegistry(mock_uow, clock).deactivate("d" * 64, account_id)

    assert count == 1
    mock_uow.sessions.deactivate.assert_awaited_once_with("d" * 64, account_id)
