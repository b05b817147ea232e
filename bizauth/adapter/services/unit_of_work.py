from sqlmodel.ext.asyncio.session import AsyncSession

from bizauth.adapter.repositories.account_repository import AccountRepository
from bizauth.adapter.repositories.account_role_repository import AccountRoleRepository
from bizauth.adapter.repositories.audit_event_repository import AuditEventRepository
from bizauth.adapter.repositories.business_repository import BusinessRepository
from bizauth.adapter.repositories.preference_repository import AccountPreferenceRepository
from bizauth.adapter.repositories.role_repository import RoleRepository
from bizauth.adapter.repositories.route_role_repository import RouteRoleRepository
from bizauth.adapter.repositories.session_repository import SessionRepository
from bizauth.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.businesses = BusinessRepository(self.session)
        self.accounts = AccountRepository(self.session)
        self.preferences = AccountPreferenceRepository(self.session)
        self.roles = RoleRepository(self.session)
        self.account_roles = AccountRoleRepository(self.session)
        self.route_roles = RouteRoleRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Anything not committed inside the block is discarded
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
