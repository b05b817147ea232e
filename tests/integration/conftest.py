from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from bizauth.adapter.cache import MemoryCache
from bizauth.adapter.services.audit_sink import SqlAlchemyAuditSink
from bizauth.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from bizauth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from bizauth.app.services.clock import SystemClock
from bizauth.app.services.rate_limiter import FixedWindowRateLimiter
from bizauth.depends import (
    get_audit_sink,
    get_cache,
    get_password_hasher,
    get_rate_limiter,
    get_unit_of_work,
)
from bizauth.domain.entities import Account

OWNER_PASSWORD = "SecurePass123!"
MEMBER_PASSWORD = "MemberPass123!"

# Low cost factor keeps bcrypt fast in tests
password_hasher = BcryptPasswordHasher(rounds=4)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(engine, db_session):
    from bizauth.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    audit_session_factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    audit_sink = SqlAlchemyAuditSink(audit_session_factory)
    clock = SystemClock()
    cache = MemoryCache(clock)
    rate_limiter = FixedWindowRateLimiter(clock)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_audit_sink] = lambda: audit_sink
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    app.dependency_overrides[get_password_hasher] = lambda: password_hasher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def register_business(client):
    """Registers a business with its owner and returns the response body"""

    async def _register(document="12345678000199", email="owner@acme.com", name="Acme Corp"):
        response = await client.post(
            "/auth/register",
            json={
                "business_name": name,
                "business_document": document,
                "name": "Business Owner",
                "email": email,
                "password": OWNER_PASSWORD,
            },
        )
        assert response.status_code == 201
        return response.json()

    return _register


@pytest.fixture
def login(client):
    """Logs in and returns the Authorization header of the new session"""

    async def _login(email, password=OWNER_PASSWORD):
        response = await client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login


@pytest.fixture
def create_member(db_session):
    """Inserts a regular (non-owner) account into a business and returns its id"""

    async def _create(business_id, email="member@acme.com"):
        account = Account(
            business_id=UUID(str(business_id)),
            email=email,
            name="Team Member",
            password_hash=password_hasher.hash(MEMBER_PASSWORD),
        )
        db_session.add(account)
        await db_session.commit()
        # The instance expires once a request rolls the shared session back
        return str(account.id)

    return _create
