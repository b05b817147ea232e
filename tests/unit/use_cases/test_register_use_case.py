from uuid import uuid4

import pytest
from unittest.mock import AsyncMock

from bizauth.app.use_cases.auth import RegisterCommand, RegisterUseCase
from bizauth.domain.entities import Account, Business
from tests.fakes import FailingAuditSink, PlainPasswordHasher, RecordingAuditSink


@pytest.fixture
def command():
    return RegisterCommand(
        business_name="Acme Corp",
        business_document="12345678000199",
        name="Ana Owner",
        email="Ana@Acme.com",
        password="SecurePass123!",
    )


@pytest.fixture
def fresh_uow(mock_uow):
    mock_uow.businesses.get_by_document.return_value = None
    mock_uow.accounts.get_by_email.return_value = None
    mock_uow.businesses.create = AsyncMock(side_effect=lambda b: b)
    mock_uow.accounts.create = AsyncMock(side_effect=lambda a: a)
    mock_uow.preferences.create = AsyncMock(side_effect=lambda p: p)
    return mock_uow


@pytest.mark.asyncio
async def test_register_creates_business_owner_and_preferences(fresh_uow, command):
    sink = RecordingAuditSink()

    result = await RegisterUseCase(fresh_uow, PlainPasswordHasher(), sink).execute(command)

    assert result.is_ok()
    account = fresh_uow.accounts.create.await_args.args[0]
    business = fresh_uow.businesses.create.await_args.args[0]
    assert account.is_company_owner is True
    assert account.business_id == business.id
    assert account.email == "ana@acme.com"
    assert account.password_hash == "hashed:SecurePass123!"
    assert result.value.preferences.theme == "light"
    fresh_uow.commit.assert_awaited_once()
    assert sink.contexts == ["business_create", "account_create"]


@pytest.mark.asyncio
async def test_register_rejects_duplicate_document(fresh_uow, command):
    fresh_uow.businesses.get_by_document.return_value = Business(
        id=uuid4(), name="Other", document=command.business_document
    )

    result = await RegisterUseCase(
        fresh_uow, PlainPasswordHasher(), RecordingAuditSink()
    ).execute(command)

    assert result.error.code == "DOCUMENT_ALREADY_EXISTS"
    fresh_uow.businesses.create.assert_not_awaited()
    fresh_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_register_rejects_duplicate_email(fresh_uow, command):
    fresh_uow.accounts.get_by_email.return_value = Account(
        id=uuid4(), business_id=uuid4(), email="ana@acme.com", name="Ana", password_hash="x"
    )

    result = await RegisterUseCase(
        fresh_uow, PlainPasswordHasher(), RecordingAuditSink()
    ).execute(command)

    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    fresh_uow.accounts.get_by_email.assert_awaited_once_with("ana@acme.com")


@pytest.mark.asyncio
async def test_register_survives_audit_failure(fresh_uow, command):
    result = await RegisterUseCase(fresh_uow, PlainPasswordHasher(), FailingAuditSink()).execute(
        command
    )

    assert result.is_ok()
