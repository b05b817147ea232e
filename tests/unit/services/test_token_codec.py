from datetime import timedelta
from uuid import uuid4

import pytest
from jose import jwt

from bizauth.api.utils.jwt import ExpiredTokenError, InvalidTokenError, TokenCodec
from bizauth.domain.auth import UnverifiedClaims, VerifiedClaims

SECRET = "unit-test-secret"
TTL = timedelta(days=7)


@pytest.fixture
def codec(clock):
    return TokenCodec(SECRET, clock)


def test_issue_then_verify_returns_claims(codec, clock):
    account_id, business_id = uuid4(), uuid4()

    signed = codec.issue(account_id, business_id, "owner@acme.com", TTL)
    claims = codec.verify(signed.value)

    assert isinstance(claims, VerifiedClaims)
    assert claims.account_id == account_id
    assert claims.business_id == business_id
    assert claims.email == "owner@acme.com"
    assert claims.issued_at == signed.issued_at
    assert claims.expires_at == clock.now() + TTL
    assert claims.expires_at > claims.issued_at


def test_tokens_issued_in_the_same_second_differ(codec):
    account_id, business_id = uuid4(), uuid4()

    first = codec.issue(account_id, business_id, "a@acme.com", TTL)
    second = codec.issue(account_id, business_id, "a@acme.com", TTL)

    assert first.value != second.value


def test_token_signed_with_another_secret_is_invalid(codec, clock):
    other = TokenCodec("another-secret", clock)
    signed = other.issue(uuid4(), uuid4(), "a@acme.com", TTL)

    with pytest.raises(InvalidTokenError):
        codec.verify(signed.value)


def test_tampered_payload_is_invalid(codec):
    signed = codec.issue(uuid4(), uuid4(), "victim@acme.com", TTL)
    header, _, signature = signed.value.split(".")

    claims = jwt.get_unverified_claims(signed.value)
    claims["account_id"] = str(uuid4())
    forged = jwt.encode(claims, "attacker-secret", algorithm="HS256")
    _, forged_payload, _ = forged.split(".")

    with pytest.raises(InvalidTokenError):
        codec.verify(f"{header}.{forged_payload}.{signature}")


def test_garbage_token_is_invalid(codec):
    with pytest.raises(InvalidTokenError):
        codec.verify("not-a-token")


def test_missing_claims_are_invalid(codec, clock):
    now = int(clock.now().timestamp())
    token = jwt.encode({"iat": now, "exp": now + 60}, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        codec.verify(token)


def test_token_is_valid_until_the_last_second(codec, clock):
    signed = codec.issue(uuid4(), uuid4(), "a@acme.com", timedelta(seconds=60))

    clock.advance(seconds=59)
    codec.verify(signed.value)

    clock.advance(seconds=1)
    with pytest.raises(ExpiredTokenError):
        codec.verify(signed.value)


def test_expired_token_stays_expired(codec, clock):
    signed = codec.issue(uuid4(), uuid4(), "a@acme.com", timedelta(seconds=60))

    clock.advance(hours=1)

    with pytest.raises(ExpiredTokenError):
        codec.verify(signed.value)
    clock.advance(days=30)
    with pytest.raises(ExpiredTokenError):
        codec.verify(signed.value)


def test_non_positive_ttl_is_rejected(codec):
    with pytest.raises(ValueError):
        codec.issue(uuid4(), uuid4(), "a@acme.com", timedelta(0))


def test_empty_secret_is_rejected(clock):
    with pytest.raises(ValueError):
        TokenCodec("", clock)


def test_decode_unchecked_reads_foreign_tokens(codec, clock):
    account_id = uuid4()
    signed = TokenCodec("another-secret", clock).issue(account_id, uuid4(), "a@acme.com", TTL)

    claims = codec.decode_unchecked(signed.value)

    assert isinstance(claims, UnverifiedClaims)
    assert not isinstance(claims, VerifiedClaims)
    assert claims.account_id == str(account_id)
    assert claims.expires_at == signed.expires_at


def test_decode_unchecked_returns_none_for_garbage(codec):
    assert codec.decode_unchecked("garbage") is None


def test_remaining_lifetime(codec, clock):
    signed = codec.issue(uuid4(), uuid4(), "a@acme.com", timedelta(hours=2))

    clock.advance(minutes=30)
    assert codec.remaining_lifetime(signed.value) == timedelta(minutes=90)

    clock.advance(hours=3)
    assert codec.remaining_lifetime(signed.value) == timedelta(0)
    assert codec.remaining_lifetime("garbage") == timedelta(0)
