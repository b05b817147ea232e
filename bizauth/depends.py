from datetime import timedelta
from typing import Optional

from fastapi import Depends, Header, Request, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from bizauth.adapter.cache import MemoryCache, RedisCache
from bizauth.adapter.services.audit_sink import SqlAlchemyAuditSink
from bizauth.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from bizauth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from bizauth.api.error import ClientError, unauthorized
from bizauth.api.utils.jwt import TokenCodec
from bizauth.api.utils.request import get_client_ip, get_user_agent
from bizauth.app.services.audit_sink import IAuditSink
from bizauth.app.services.auth_gateway import AuthGateway, extract_bearer_token
from bizauth.app.services.cache import ICache
from bizauth.app.services.clock import IClock, SystemClock
from bizauth.app.services.password_hasher import IPasswordHasher
from bizauth.app.services.rate_limiter import (
    CacheRateLimiter,
    FixedWindowRateLimiter,
    IRateLimiter,
)
from bizauth.app.services.revocation_store import RevocationStore
from bizauth.domain.auth import Principal

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

clock = SystemClock()

if ApplicationConfig.CACHE_BACKEND == "redis":
    cache = RedisCache(ApplicationConfig.REDIS_URL)
    rate_limiter = CacheRateLimiter(cache)
else:
    cache = MemoryCache(clock)
    rate_limiter = FixedWindowRateLimiter(
        clock, sweep_interval_seconds=ApplicationConfig.RATE_LIMIT_SWEEP_INTERVAL
    )

token_codec = TokenCodec(ApplicationConfig.JWT_SECRET, clock)
password_hasher = BcryptPasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)
audit_sink = SqlAlchemyAuditSink(AsyncSessionLocal)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_clock() -> IClock:
    return clock


def get_cache() -> ICache:
    return cache


def get_rate_limiter() -> IRateLimiter:
    return rate_limiter


def get_token_codec() -> TokenCodec:
    return token_codec


def get_password_hasher() -> IPasswordHasher:
    return password_hasher


def get_audit_sink() -> IAuditSink:
    return audit_sink


def get_auth_gateway(
    uow=Depends(get_unit_of_work),
    codec: TokenCodec = Depends(get_token_codec),
    cache: ICache = Depends(get_cache),
    limiter: IRateLimiter = Depends(get_rate_limiter),
    hasher: IPasswordHasher = Depends(get_password_hasher),
    sink: IAuditSink = Depends(get_audit_sink),
    clock: IClock = Depends(get_clock),
) -> AuthGateway:
    return AuthGateway(
        uow=uow,
        codec=codec,
        revocations=RevocationStore(cache),
        rate_limiter=limiter,
        password_hasher=hasher,
        audit_sink=sink,
        clock=clock,
        token_ttl=timedelta(seconds=ApplicationConfig.JWT_EXPIRES_IN_SECONDS),
        login_rate_limit=ApplicationConfig.LOGIN_RATE_LIMIT,
        login_rate_window_seconds=ApplicationConfig.LOGIN_RATE_WINDOW_SECONDS,
    )


def get_bearer_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    return extract_bearer_token(authorization)


async def get_current_principal(
    authorization: Optional[str] = Header(default=None),
    gateway: AuthGateway = Depends(get_auth_gateway),
) -> Principal:
    """
    Dependency to authenticate the bearer token of the request.

    Raises:
        ClientError: 401 UNAUTHORIZED whatever the reason; the reason is logged
    """
    result = await gateway.authenticate(authorization)
    if result.is_err():
        raise unauthorized()
    return result.value


def require_route(route: str):
    """
    Dependency factory gating an endpoint behind a route permission.

    Usage:
        principal: Principal = Depends(require_route("/audit-logs"))
    """

    async def _require_route(
        principal: Principal = Depends(get_current_principal),
        gateway: AuthGateway = Depends(get_auth_gateway),
    ) -> Principal:
        result = await gateway.authorize(principal, route)
        if result.is_err():
            raise ClientError(result.error, status_code=status.HTTP_403_FORBIDDEN)
        return principal

    return _require_route


class ClientInfo:
    """Client address and user agent of the request, for audit events"""

    def __init__(self, request: Request):
        self.ip = get_client_ip(request, ApplicationConfig.TRUSTED_PROXIES)
        self.user_agent = get_user_agent(request)
