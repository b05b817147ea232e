from datetime import timedelta
from uuid import uuid4

import pytest
from unittest.mock import AsyncMock

from bizauth.adapter.cache import MemoryCache
from bizauth.api.utils.jwt import TokenCodec
from bizauth.app.services.auth_gateway import AuthGateway, extract_bearer_token
from bizauth.app.services.rate_limiter import FixedWindowRateLimiter
from bizauth.app.services.revocation_store import RevocationStore
from bizauth.app.services.token_hasher import TokenHasher
from bizauth.domain.auth import AccessReason, Principal
from bizauth.domain.entities import (
    Account,
    AccountPreference,
    Business,
    IssuedToken,
    ThemeEnum,
)
from tests.fakes import (
    FailingAuditSink,
    FailingCache,
    PlainPasswordHasher,
    RecordingAuditSink,
)

SECRET = "gateway-test-secret"
TTL = timedelta(days=7)
PASSWORD = "SecurePass123!"


@pytest.fixture
def business():
    return Business(id=uuid4(), name="Acme Corp", document="12345678000199", active=True)


@pytest.fixture
def account(business):
    return Account(
        id=uuid4(),
        business_id=business.id,
        email="owner@acme.com",
        name="Owner",
        password_hash=f"hashed:{PASSWORD}",
        is_company_owner=False,
        active=True,
    )


@pytest.fixture
def codec(clock):
    return TokenCodec(SECRET, clock)


@pytest.fixture
def cache(clock):
    return MemoryCache(clock)


@pytest.fixture
def sink():
    return RecordingAuditSink()


@pytest.fixture
def hasher():
    return PlainPasswordHasher()


@pytest.fixture
def gateway(mock_uow, codec, cache, sink, hasher, clock):
    return AuthGateway(
        uow=mock_uow,
        codec=codec,
        revocations=RevocationStore(cache),
        rate_limiter=FixedWindowRateLimiter(clock),
        password_hasher=hasher,
        audit_sink=sink,
        clock=clock,
        token_ttl=TTL,
    )


@pytest.fixture
def login_repos(mock_uow, account, business):
    """Repositories answering a login of `account`"""
    mock_uow.accounts.get_active_by_email.return_value = account
    mock_uow.businesses.get_by_id.return_value = business
    mock_uow.preferences.get_by_account.return_value = None
    mock_uow.preferences.create = AsyncMock(side_effect=lambda preference: preference)
    mock_uow.sessions.create = AsyncMock(side_effect=lambda record: record)
    return mock_uow


def principal_of(account):
    return Principal(account_id=account.id, business_id=account.business_id, email=account.email)


# ---------------------------------------------------------------------------
# Bearer extraction
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer abc.def.ghi", "abc.def.ghi"),
        ("Bearer   ", None),
        ("Basic dXNlcjpwYXNz", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_login_success(gateway, login_repos, account, business, codec, sink):
    result = await gateway.login("Owner@Acme.com ", PASSWORD, client_ip="10.0.0.1", user_agent="pytest")

    assert result.is_ok()
    response = result.value
    claims = codec.verify(response.token)
    assert claims.account_id == account.id
    assert claims.business_id == business.id
    assert response.account.email == "owner@acme.com"
    assert response.business.name == "Acme Corp"
    assert response.preferences.theme == ThemeEnum.light.value

    login_repos.accounts.get_active_by_email.assert_awaited_once_with("owner@acme.com")

    record = login_repos.sessions.create.await_args.args[0]
    assert isinstance(record, IssuedToken)
    assert record.active is True
    assert record.account_id == account.id
    assert record.token_digest == TokenHasher.digest(response.token)
    assert record.expires_at == claims.expires_at
    login_repos.commit.assert_awaited_once()

    assert sink.contexts == ["auth_login"]
    assert sink.events[0].ip_address == "10.0.0.1"
    assert sink.events[0].user_agent == "pytest"


@pytest.mark.asyncio
async def test_login_writes_session_record_last(gateway, login_repos):
    calls = []
    login_repos.preferences.create = AsyncMock(
        side_effect=lambda p: calls.append("preferences") or p
    )
    login_repos.sessions.create = AsyncMock(side_effect=lambda r: calls.append("session") or r)
    login_repos.commit = AsyncMock(side_effect=lambda: calls.append("commit"))

    result = await gateway.login("owner@acme.com", PASSWORD)

    assert result.is_ok()
    assert calls == ["preferences", "session", "commit"]


@pytest.mark.asyncio
async def test_login_keeps_existing_preferences(gateway, login_repos, account, business):
    login_repos.preferences.get_by_account.return_value = AccountPreference(
        business_id=business.id, account_id=account.id, theme=ThemeEnum.dark
    )

    result = await gateway.login("owner@acme.com", PASSWORD)

    assert result.value.preferences.theme == "dark"
    login_repos.preferences.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_login_wrong_password(gateway, login_repos, sink):
    result = await gateway.login("owner@acme.com", "WrongPassword!")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    login_repos.sessions.create.assert_not_awaited()
    login_repos.commit.assert_not_awaited()
    assert sink.contexts == ["auth_deny"]


@pytest.mark.asyncio
async def test_login_unknown_email_looks_like_wrong_password(gateway, mock_uow, sink, hasher):
    mock_uow.accounts.get_active_by_email.return_value = None

    result = await gateway.login("nobody@acme.com", PASSWORD)

    assert result.error.code == "INVALID_CREDENTIALS"
    assert result.error.message == "Invalid email or password"
    assert hasher.verify_calls == 1
    assert sink.events == []


@pytest.mark.asyncio
async def test_unknown_email_costs_one_verify_per_request(
    mock_uow, codec, cache, sink, hasher, clock
):
    mock_uow.accounts.get_active_by_email.return_value = None

    for _ in range(2):
        per_request = AuthGateway(
            uow=mock_uow,
            codec=codec,
            revocations=RevocationStore(cache),
            rate_limiter=FixedWindowRateLimiter(clock),
            password_hasher=hasher,
            audit_sink=sink,
            clock=clock,
            token_ttl=TTL,
        )
        result = await per_request.login("nobody@acme.com", PASSWORD)
        assert result.error.code == "INVALID_CREDENTIALS"

    assert hasher.hash_calls == 0
    assert hasher.verify_calls == 2


@pytest.mark.asyncio
async def test_login_inactive_business(gateway, login_repos, business):
    business.active = False

    result = await gateway.login("owner@acme.com", PASSWORD)

    assert result.error.code == "INVALID_CREDENTIALS"
    login_repos.sessions.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_login_rate_limit_precedes_password_check(gateway, login_repos, hasher):
    for _ in range(5):
        result = await gateway.login("owner@acme.com", "WrongPassword!", client_ip="10.0.0.9")
        assert result.error.code == "INVALID_CREDENTIALS"
    verify_calls = hasher.verify_calls

    result = await gateway.login("owner@acme.com", PASSWORD, client_ip="10.0.0.9")

    assert result.error.code == "RATE_LIMITED"
    assert result.error.details["retry_after"] > 0
    assert hasher.verify_calls == verify_calls

    other_client = await gateway.login("owner@acme.com", PASSWORD, client_ip="10.0.0.10")
    assert other_client.is_ok()


@pytest.mark.asyncio
async def test_login_survives_audit_failure(mock_uow, login_repos, codec, cache, hasher, clock):
    gateway = AuthGateway(
        uow=mock_uow,
        codec=codec,
        revocations=RevocationStore(cache),
        rate_limiter=FixedWindowRateLimiter(clock),
        password_hasher=hasher,
        audit_sink=FailingAuditSink(),
        clock=clock,
        token_ttl=TTL,
    )

    assert (await gateway.login("owner@acme.com", PASSWORD)).is_ok()
    assert (await gateway.login("owner@acme.com", "nope")).error.code == "INVALID_CREDENTIALS"


# ---------------------------------------------------------------------------
# Authenticate
# ---------------------------------------------------------------------------


@pytest.fixture
def issued(codec, account):
    return codec.issue(account.id, account.business_id, account.email, TTL)


@pytest.fixture
def live_session(mock_uow, account, issued):
    mock_uow.sessions.find_live.return_value = IssuedToken(
        business_id=account.business_id,
        account_id=account.id,
        token_digest=TokenHasher.digest(issued.value),
        expires_at=issued.expires_at,
    )
    return mock_uow


@pytest.mark.asyncio
async def test_authenticate_valid_token(gateway, live_session, issued, account, clock):
    result = await gateway.authenticate(f"Bearer {issued.value}")

    assert result.is_ok()
    assert result.value == principal_of(account)
    live_session.sessions.find_live.assert_awaited_once_with(
        TokenHasher.digest(issued.value), account.id, clock.now()
    )


@pytest.mark.asyncio
async def test_authenticate_missing_token(gateway):
    assert (await gateway.authenticate(None)).error.code == "MISSING_TOKEN"
    assert (await gateway.authenticate("Token abc")).error.code == "MISSING_TOKEN"


@pytest.mark.asyncio
async def test_authenticate_invalid_token(gateway, mock_uow):
    result = await gateway.authenticate("Bearer not.a.token")

    assert result.error.code == "INVALID_TOKEN"
    mock_uow.sessions.find_live.assert_not_awaited()


@pytest.mark.asyncio
async def test_authenticate_expired_token(gateway, live_session, issued, clock):
    clock.advance(days=8)

    result = await gateway.authenticate(f"Bearer {issued.value}")

    assert result.error.code == "EXPIRED_TOKEN"


@pytest.mark.asyncio
async def test_authenticate_revoked_token(gateway, live_session, issued, cache):
    await RevocationStore(cache).revoke(issued.value, TTL)

    result = await gateway.authenticate(f"Bearer {issued.value}")

    assert result.error.code == "TOKEN_REVOKED"
    live_session.sessions.find_live.assert_not_awaited()


@pytest.mark.asyncio
async def test_authenticate_inactive_session(gateway, mock_uow, issued):
    mock_uow.sessions.find_live.return_value = None

    result = await gateway.authenticate(f"Bearer {issued.value}")

    assert result.error.code == "SESSION_INACTIVE"


@pytest.mark.asyncio
async def test_authenticate_fails_closed_when_store_is_down(gateway, mock_uow, issued):
    mock_uow.sessions.find_live.side_effect = ConnectionError("database unreachable")

    result = await gateway.authenticate(f"Bearer {issued.value}")

    assert result.error.code == "SESSION_UNVERIFIABLE"


@pytest.mark.asyncio
async def test_authenticate_falls_back_to_registry_when_cache_is_down(
    live_session, codec, hasher, sink, clock, issued, account
):
    gateway = AuthGateway(
        uow=live_session,
        codec=codec,
        revocations=RevocationStore(FailingCache()),
        rate_limiter=FixedWindowRateLimiter(clock),
        password_hasher=hasher,
        audit_sink=sink,
        clock=clock,
        token_ttl=TTL,
    )

    result = await gateway.authenticate(f"Bearer {issued.value}")

    assert result.is_ok()
    live_session.sessions.find_live.assert_awaited_once()


# ---------------------------------------------------------------------------
# Authorize
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_authorize_owner(gateway, mock_uow, account):
    account.is_company_owner = True
    mock_uow.accounts.get_in_business.return_value = account

    result = await gateway.authorize(principal_of(account), "/business-admin")

    assert result.is_ok()
    assert result.value.reason == AccessReason.owner


@pytest.mark.asyncio
async def test_authorize_denied_is_forbidden(gateway, mock_uow, account):
    mock_uow.accounts.get_in_business.return_value = account
    mock_uow.roles.get_active_role_ids_for_account.return_value = []

    result = await gateway.authorize(principal_of(account), "/audit-logs")

    assert result.error.code == "FORBIDDEN"
    assert result.error.details == {"route": "/audit-logs", "reason": "no_roles"}


@pytest.mark.asyncio
async def test_authorize_denies_when_store_is_down(gateway, mock_uow, account):
    mock_uow.accounts.get_in_business.side_effect = ConnectionError("database unreachable")

    result = await gateway.authorize(principal_of(account), "/dashboard")

    assert result.error.code == "FORBIDDEN"


@pytest.mark.asyncio
async def test_list_accessible_routes(gateway, mock_uow, account):
    mock_uow.accounts.get_in_business.return_value = account
    mock_uow.roles.get_active_role_ids_for_account.return_value = [uuid4()]
    mock_uow.route_roles.list_routes_for_roles.return_value = ["/dashboard"]

    routes = await gateway.list_accessible_routes(principal_of(account))

    assert routes == {"/dashboard", "/profile"}


# ---------------------------------------------------------------------------
# Logout
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_logout_deactivates_and_blacklists(gateway, live_session, issued, account, sink, cache):
    live_session.sessions.deactivate.return_value = 1

    result = await gateway.logout(issued.value, principal_of(account), client_ip="10.0.0.1")

    assert result.is_ok()
    assert result.value == {"deactivated": 1, "blacklisted": True}
    live_session.sessions.deactivate.assert_awaited_once_with(
        TokenHasher.digest(issued.value), account.id
    )
    live_session.commit.assert_awaited_once()
    assert await RevocationStore(cache).is_revoked(issued.value)
    assert sink.contexts == ["auth_logout"]

    after = await gateway.authenticate(f"Bearer {issued.value}")
    assert after.error.code == "TOKEN_REVOKED"


@pytest.mark.asyncio
async def test_logout_is_idempotent(gateway, mock_uow, issued, account):
    mock_uow.sessions.deactivate.side_effect = [1, 0]

    first = await gateway.logout(issued.value, principal_of(account))
    second = await gateway.logout(issued.value, principal_of(account))

    assert first.is_ok()
    assert second.is_ok()
    assert second.value["deactivated"] == 0


@pytest.mark.asyncio
async def test_logout_is_scoped_to_the_principal(gateway, mock_uow, issued, account, business, cache):
    intruder = Principal(account_id=uuid4(), business_id=business.id, email="intruder@acme.com")
    mock_uow.sessions.deactivate.return_value = 0

    result = await gateway.logout(issued.value, intruder)

    assert result.value == {"deactivated": 0, "blacklisted": False}
    mock_uow.sessions.deactivate.assert_awaited_once_with(
        TokenHasher.digest(issued.value), intruder.account_id
    )
    assert not await RevocationStore(cache).is_revoked(issued.value)


@pytest.mark.asyncio
async def test_logout_of_expired_token_skips_blacklist(gateway, mock_uow, issued, account, clock):
    mock_uow.sessions.deactivate.return_value = 1
    clock.advance(days=8)

    result = await gateway.logout(issued.value, principal_of(account))

    assert result.value == {"deactivated": 1, "blacklisted": False}
