from typing import Dict, Optional

from fastapi import status

from bizauth.libs.result import Error, Result


class ClientError(Exception):
    def __init__(
        self,
        base_error: Error,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.base_error = base_error
        self.status_code = status_code
        self.headers = headers
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def unauthorized() -> ClientError:
    """Every authentication failure looks the same from the outside."""
    return ClientError(
        Error("UNAUTHORIZED", "Authentication required"),
        status_code=status.HTTP_401_UNAUTHORIZED,
        headers={"WWW-Authenticate": "Bearer"},
    )


def rate_limited(error: Error) -> ClientError:
    retry_after = (error.details or {}).get("retry_after", 1)
    return ClientError(
        error,
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        headers={"Retry-After": str(retry_after)},
    )


NOT_FOUND_CODES = (
    "ACCOUNT_NOT_FOUND",
    "ROLE_NOT_FOUND",
    "ASSIGNMENT_NOT_FOUND",
    "GRANT_NOT_FOUND",
)
CONFLICT_CODES = (
    "EMAIL_ALREADY_EXISTS",
    "ROLE_NAME_TAKEN",
    "ROLE_ALREADY_ASSIGNED",
    "ROUTE_ALREADY_GRANTED",
)
INVALID_CODES = (
    "INVALID_ROLE_NAME",
    "INVALID_ROLE_COLOR",
    "UNKNOWN_ROUTE",
    "CANNOT_DEACTIVATE_SELF",
)


def unwrap_admin_result(result: Result):
    """Value of an administration use case result, or the matching HTTP error"""
    if result.is_ok():
        return result.value

    error = result.error
    if error.code == "INSUFFICIENT_ROLE":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    if error.code in NOT_FOUND_CODES:
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code in CONFLICT_CODES:
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    if error.code in INVALID_CODES:
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)
