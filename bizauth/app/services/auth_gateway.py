"""
Auth Gateway

Orchestrates the auth core for one request: authenticate a bearer token,
authorize a principal for a route, log in and log out.

Ordering guarantees:
- authentication completes before any authorization query
- the rate limit is checked before any password comparison
- the session record is the last durable write of a login
- audit events are recorded best-effort after the work they describe
"""

import logging
from datetime import timedelta
from typing import Any, Dict, Optional, Set

from bizauth.api.utils.jwt import ExpiredTokenError, InvalidTokenError, TokenCodec
from bizauth.app.services.audit_sink import IAuditSink, record_safely
from bizauth.app.services.clock import IClock
from bizauth.app.services.password_hasher import IPasswordHasher
from bizauth.app.services.permission_resolver import PermissionResolver
from bizauth.app.services.rate_limiter import IRateLimiter
from bizauth.app.services.revocation_store import RevocationStore
from bizauth.app.services.session_registry import SessionRegistry
from bizauth.app.services.token_hasher import TokenHasher
from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.app.use_cases.auth.dtos import (
    AccountInfo,
    BusinessInfo,
    LoginResponse,
    PreferencesInfo,
)
from bizauth.domain.auth import AccessDecision, Principal
from bizauth.domain.entities import (
    Account,
    AccountPreference,
    AuditContext,
    AuditEvent,
    ThemeEnum,
)
from bizauth.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "
UNKNOWN_CLIENT = "unknown"

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def extract_bearer_token(authorization_header: Optional[str]) -> Optional[str]:
    """Return the token of an `Authorization: Bearer <token>` header, or None"""
    if not authorization_header:
        return None
    if not authorization_header.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization_header[len(BEARER_PREFIX):].strip()
    return token or None


class AuthGateway:
    """
    Entry point of the auth core.

    Owns the transaction boundary: every operation enters the UnitOfWork
    itself and hands the entered UnitOfWork to SessionRegistry and
    PermissionResolver.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        codec: TokenCodec,
        revocations: RevocationStore,
        rate_limiter: IRateLimiter,
        password_hasher: IPasswordHasher,
        audit_sink: IAuditSink,
        clock: IClock,
        token_ttl: timedelta,
        login_rate_limit: int = 5,
        login_rate_window_seconds: int = 60,
        token_hasher: TokenHasher = TokenHasher(),
    ):
        self.uow = uow
        self.codec = codec
        self.revocations = revocations
        self.rate_limiter = rate_limiter
        self.password_hasher = password_hasher
        self.audit_sink = audit_sink
        self.clock = clock
        self.token_ttl = token_ttl
        self.login_rate_limit = login_rate_limit
        self.login_rate_window_seconds = login_rate_window_seconds
        self.token_hasher = token_hasher

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def authenticate(
        self, authorization_header: Optional[str]
    ) -> Result[Principal]:
        """
        Establish the principal of a request.

        Checks run in order: bearer present, signature and expiry,
        revocation blacklist, durable session record. The first failure
        wins. If the session store cannot be read the token is rejected.
        """
        raw_token = extract_bearer_token(authorization_header)
        if raw_token is None:
            return self._reject("MISSING_TOKEN", "Authorization bearer token is required")

        try:
            claims = self.codec.verify(raw_token)
        except ExpiredTokenError:
            return self._reject("EXPIRED_TOKEN", "Token has expired")
        except InvalidTokenError:
            return self._reject("INVALID_TOKEN", "Token is invalid")

        if await self.revocations.is_revoked(raw_token):
            return self._reject("TOKEN_REVOKED", "Token has been revoked")

        digest = self.token_hasher.digest(raw_token)
        try:
            async with self.uow:
                registry = SessionRegistry(self.uow, self.clock)
                active = await registry.is_active(digest, claims.account_id)
        except Exception:
            logger.error(
                f"Session store unreachable, rejecting token of account {claims.account_id}",
                exc_info=True,
            )
            return Return.err(
                Error("SESSION_UNVERIFIABLE", "Session could not be verified")
            )

        if not active:
            return self._reject("SESSION_INACTIVE", "Session is no longer active")

        return Return.ok(claims.to_principal())

    def _reject(self, code: str, message: str) -> Result[Principal]:
        logger.warning(f"Authentication rejected: {code}")
        return Return.err(Error(code, message))

    # ------------------------------------------------------------------
    # Authorization
    # ------------------------------------------------------------------

    async def authorize(self, principal: Principal, route: str) -> Result[AccessDecision]:
        """Allow or deny principal on route; a store failure denies."""
        try:
            async with self.uow:
                decision = await PermissionResolver(self.uow).can_access(
                    principal.account_id, principal.business_id, route
                )
        except Exception:
            logger.error(
                f"Permission lookup failed for account {principal.account_id} on {route}",
                exc_info=True,
            )
            return Return.err(
                Error(
                    "FORBIDDEN",
                    "Access to this route is not allowed",
                    details={"route": route, "reason": "unverifiable"},
                )
            )

        if not decision.allowed:
            logger.info(
                f"Access denied: account={principal.account_id} "
                f"business={principal.business_id} route={route} reason={decision.reason.value}"
            )
            return Return.err(
                Error(
                    "FORBIDDEN",
                    "Access to this route is not allowed",
                    details={"route": route, "reason": decision.reason.value},
                )
            )

        return Return.ok(decision)

    async def list_accessible_routes(self, principal: Principal) -> Set[str]:
        async with self.uow:
            return await PermissionResolver(self.uow).list_accessible_routes(
                principal.account_id, principal.business_id
            )

    # ------------------------------------------------------------------
    # Login / Logout
    # ------------------------------------------------------------------

    async def login(
        self,
        email: str,
        password: str,
        client_ip: str = UNKNOWN_CLIENT,
        user_agent: Optional[str] = None,
    ) -> Result[LoginResponse]:
        """
        Authenticate credentials and open a new session.

        Business Rules:
        - At most login_rate_limit attempts per client IP per window
        - Unknown email, inactive account or business and wrong password
          all produce the same INVALID_CREDENTIALS error
        - Wrong password on a known account records an auth_deny event
        - Default preferences are created on first login
        """
        decision = await self.rate_limiter.check(
            f"login:{client_ip}", self.login_rate_limit, self.login_rate_window_seconds
        )
        if not decision.allowed:
            logger.warning(f"Login rate limit exceeded for {client_ip}")
            return Return.err(
                Error(
                    "RATE_LIMITED",
                    "Too many login attempts, please try again later",
                    details={"retry_after": decision.retry_after},
                )
            )

        normalized_email = email.strip().lower()

        async with self.uow:
            account = await self.uow.accounts.get_active_by_email(normalized_email)

            if account is None:
                # Keep the response time of unknown emails close to known ones
                self.password_hasher.verify(password, self.password_hasher.dummy_hash())
                logger.info("Login failed: unknown or inactive account")
                return Return.err(Error("INVALID_CREDENTIALS", INVALID_CREDENTIALS_MESSAGE))

            if not self.password_hasher.verify(password, account.password_hash):
                logger.info(f"Login failed: wrong password for account {account.id}")
                await record_safely(
                    self.audit_sink,
                    self._audit_event(
                        account,
                        AuditContext.auth_deny,
                        "Login denied: wrong password",
                        client_ip,
                        user_agent,
                        {"email": normalized_email},
                    ),
                )
                return Return.err(Error("INVALID_CREDENTIALS", INVALID_CREDENTIALS_MESSAGE))

            business = await self.uow.businesses.get_by_id(account.business_id)
            if business is None or not business.active:
                return Return.err(Error("INVALID_CREDENTIALS", INVALID_CREDENTIALS_MESSAGE))

            preference = await self.uow.preferences.get_by_account(business.id, account.id)
            if preference is None:
                preference = await self.uow.preferences.create(
                    AccountPreference(
                        business_id=business.id,
                        account_id=account.id,
                        theme=ThemeEnum.light,
                    )
                )

            signed = self.codec.issue(account.id, business.id, account.email, self.token_ttl)

            # Last durable write of the login
            await SessionRegistry(self.uow, self.clock).create(
                business_id=business.id,
                account_id=account.id,
                token_digest=self.token_hasher.digest(signed.value),
                expires_at=signed.expires_at,
            )

            await self.uow.commit()

            response = LoginResponse(
                token=signed.value,
                expires_at=signed.expires_at,
                account=AccountInfo.from_entity(account),
                business=BusinessInfo.from_entity(business),
                preferences=PreferencesInfo.from_entity(preference),
            )

        await record_safely(
            self.audit_sink,
            self._audit_event(
                account,
                AuditContext.auth_login,
                "Login succeeded",
                client_ip,
                user_agent,
                {"email": normalized_email},
            ),
        )
        logger.info(f"Account {account.id} logged in to business {business.id}")
        return Return.ok(response)

    async def logout(
        self,
        raw_token: str,
        principal: Principal,
        client_ip: str = UNKNOWN_CLIENT,
        user_agent: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        """
        End the session of the presented token. Idempotent.

        The durable record is deactivated first (scoped to the principal's
        account) and committed; the blacklist entry is written afterwards
        and only for a token that verifiably belongs to the principal.
        """
        digest = self.token_hasher.digest(raw_token)
        async with self.uow:
            deactivated = await SessionRegistry(self.uow, self.clock).deactivate(
                digest, principal.account_id
            )
            await self.uow.commit()

        blacklisted = False
        if self._belongs_to(raw_token, principal):
            blacklisted = await self.revocations.revoke(
                raw_token, self.codec.remaining_lifetime(raw_token)
            )

        event = AuditEvent(
            business_id=principal.business_id,
            account_id=principal.account_id,
            context=AuditContext.auth_logout,
            description="Logout",
            ip_address=client_ip,
            user_agent=user_agent,
            additional_data={"email": principal.email, "sessions": deactivated},
        )
        await record_safely(self.audit_sink, event)

        logger.info(
            f"Account {principal.account_id} logged out "
            f"(deactivated={deactivated}, blacklisted={blacklisted})"
        )
        return Return.ok({"deactivated": deactivated, "blacklisted": blacklisted})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _belongs_to(self, raw_token: str, principal: Principal) -> bool:
        try:
            claims = self.codec.verify(raw_token)
        except ExpiredTokenError:
            # Nothing to blacklist, the token is already unusable
            return False
        except InvalidTokenError:
            logger.warning(f"Logout presented an invalid token for {principal.account_id}")
            return False
        return (
            claims.account_id == principal.account_id
            and claims.business_id == principal.business_id
        )

    def _audit_event(
        self,
        account: Account,
        context: AuditContext,
        description: str,
        client_ip: str,
        user_agent: Optional[str],
        additional_data: Optional[Dict[str, Any]] = None,
    ) -> AuditEvent:
        return AuditEvent(
            business_id=account.business_id,
            account_id=account.id,
            context=context,
            description=description,
            ip_address=client_ip,
            user_agent=user_agent,
            additional_data=additional_data,
        )
