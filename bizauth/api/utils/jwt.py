from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from jose import JWTError, jwt

from bizauth.app.services.clock import IClock, SystemClock
from bizauth.domain.auth import UnverifiedClaims, VerifiedClaims


class TokenError(Exception):
    """Base class for bearer token failures"""


class InvalidTokenError(TokenError):
    """Signature mismatch, malformed token or malformed claims"""


class ExpiredTokenError(TokenError):
    """Signature is valid but the token is past its expiry"""


@dataclass(frozen=True)
class SignedToken:
    value: str
    issued_at: datetime
    expires_at: datetime


class TokenCodec:
    """
    Signs and verifies HS256 access tokens.

    Payload: account_id, business_id, email, jti, iat, exp. The signing
    secret is process configuration and never part of the token.
    Expiry is checked against the injected clock, not the library's, so
    tests can move time deterministically.
    """

    ALGORITHM = "HS256"

    def __init__(self, secret: str, clock: IClock = SystemClock()):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self.clock = clock

    def issue(
        self, account_id: UUID, business_id: UUID, email: str, ttl: timedelta
    ) -> SignedToken:
        """
        Generate a signed access token

        Args:
            account_id: Account UUID
            business_id: Business (tenant) UUID
            email: Account email
            ttl: Token lifetime, must be positive

        Returns:
            SignedToken with the compact token and its issue/expiry times
        """
        ttl_seconds = int(ttl.total_seconds())
        if ttl_seconds <= 0:
            raise ValueError("Token lifetime must be at least one second")

        issued_at = int(self.clock.now().timestamp())
        expires_at = issued_at + ttl_seconds
        payload = {
            "account_id": str(account_id),
            "business_id": str(business_id),
            "email": email,
            "jti": uuid4().hex,
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(payload, self._secret, algorithm=self.ALGORITHM)
        return SignedToken(
            value=token,
            issued_at=datetime.fromtimestamp(issued_at, UTC),
            expires_at=datetime.fromtimestamp(expires_at, UTC),
        )

    def verify(self, raw_token: str) -> VerifiedClaims:
        """
        Verify signature, then claims, then expiry

        Raises:
            InvalidTokenError: bad signature or malformed payload
            ExpiredTokenError: now >= exp
        """
        try:
            payload = jwt.decode(
                raw_token,
                self._secret,
                algorithms=[self.ALGORITHM],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise InvalidTokenError("Invalid token") from exc

        try:
            account_id = UUID(payload["account_id"])
            business_id = UUID(payload["business_id"])
            email = str(payload["email"])
            token_id = str(payload["jti"])
            issued_at = int(payload["iat"])
            expires_at = int(payload["exp"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError("Malformed token claims") from exc

        if expires_at <= issued_at:
            raise InvalidTokenError("Token expires before it was issued")

        if self.clock.now().timestamp() >= expires_at:
            raise ExpiredTokenError("Token expired")

        return VerifiedClaims(
            account_id=account_id,
            business_id=business_id,
            email=email,
            token_id=token_id,
            issued_at=datetime.fromtimestamp(issued_at, UTC),
            expires_at=datetime.fromtimestamp(expires_at, UTC),
        )

    def decode_unchecked(self, raw_token: str) -> Optional[UnverifiedClaims]:
        """
        Parse the payload WITHOUT verifying the signature.

        Only for expiry introspection (blacklist TTL). Authorization code
        must use verify(); relying on this result for access decisions is a bug.
        """
        try:
            payload = jwt.get_unverified_claims(raw_token)
        except JWTError:
            return None

        exp = payload.get("exp")
        expires_at = None
        if isinstance(exp, (int, float)) and not isinstance(exp, bool):
            expires_at = datetime.fromtimestamp(exp, UTC)

        return UnverifiedClaims(
            account_id=_optional_str(payload.get("account_id")),
            business_id=_optional_str(payload.get("business_id")),
            expires_at=expires_at,
        )

    def remaining_lifetime(self, raw_token: str) -> timedelta:
        """max(0, exp - now); zero for tokens without a readable expiry"""
        claims = self.decode_unchecked(raw_token)
        if claims is None or claims.expires_at is None:
            return timedelta(0)
        return max(timedelta(0), claims.expires_at - self.clock.now())


def _optional_str(value) -> Optional[str]:
    return None if value is None else str(value)
