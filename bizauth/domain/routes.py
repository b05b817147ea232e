"""
Route Catalogue

Every administrable route of the application. Routes are opaque strings
compared by exact equality; the profile route is the single exception and
also covers its sub-paths.
"""

from typing import FrozenSet, Tuple

DASHBOARD_ROUTE = "/dashboard"
PROFILE_ROUTE = "/profile"
AUDIT_LOGS_ROUTE = "/audit-logs"
BANK_ACCOUNTS_ROUTE = "/bank-accounts"
BUSINESS_ADMIN_ROUTE = "/business-admin"

ROUTE_CATALOGUE: Tuple[str, ...] = (
    DASHBOARD_ROUTE,
    PROFILE_ROUTE,
    AUDIT_LOGS_ROUTE,
    BANK_ACCOUNTS_ROUTE,
    BUSINESS_ADMIN_ROUTE,
)

KNOWN_ROUTES: FrozenSet[str] = frozenset(ROUTE_CATALOGUE)


def is_profile_route(route: str) -> bool:
    """Profile management is open to every active account."""
    return route == PROFILE_ROUTE or route.startswith(PROFILE_ROUTE + "/")
