from abc import ABC, abstractmethod

from bizauth.app.repositories.account_repository import IAccountRepository
from bizauth.app.repositories.account_role_repository import IAccountRoleRepository
from bizauth.app.repositories.audit_event_repository import IAuditEventRepository
from bizauth.app.repositories.business_repository import IBusinessRepository
from bizauth.app.repositories.preference_repository import IAccountPreferenceRepository
from bizauth.app.repositories.role_repository import IRoleRepository
from bizauth.app.repositories.route_role_repository import IRouteRoleRepository
from bizauth.app.repositories.session_repository import ISessionRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    businesses: IBusinessRepository
    accounts: IAccountRepository
    preferences: IAccountPreferenceRepository
    roles: IRoleRepository
    account_roles: IAccountRoleRepository
    route_roles: IRouteRoleRepository
    sessions: ISessionRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
