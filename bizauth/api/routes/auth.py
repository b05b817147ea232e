from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from bizauth.api.error import ClientError, ServerError, rate_limited, unauthorized
from bizauth.app.services.auth_gateway import AuthGateway
from bizauth.app.services.unit_of_work import UnitOfWork
from bizauth.app.use_cases.auth import (
    AccessibleRoutesResponse,
    LoadContextUseCase,
    LoginResponse,
    LogoutResponse,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    SessionContextResponse,
)
from bizauth.depends import (
    ClientInfo,
    get_audit_sink,
    get_auth_gateway,
    get_bearer_token,
    get_current_principal,
    get_password_hasher,
    get_unit_of_work,
)
from bizauth.domain.auth import Principal

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    business_name: str = Field(..., min_length=2, max_length=255, description="Business name")
    business_document: str = Field(
        ..., min_length=5, max_length=32, description="Business tax document"
    )
    name: str = Field(..., min_length=2, max_length=255, description="Owner name")
    email: EmailStr = Field(..., description="Owner email address")
    password: str = Field(..., min_length=8, description="Owner password (min 8 chars)")


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    request: RegisterRequest,
    client: ClientInfo = Depends(ClientInfo),
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher=Depends(get_password_hasher),
    audit_sink=Depends(get_audit_sink),
):
    """
    Business Registration

    Creates a business with its owner account and default preferences.

    Raises:
        - 409 Conflict: Document or email already registered
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = RegisterCommand(
        business_name=request.business_name,
        business_document=request.business_document,
        name=request.name,
        email=request.email,
        password=request.password,
    )

    use_case = RegisterUseCase(uow, password_hasher, audit_sink)
    result = await use_case.execute(command, client_ip=client.ip, user_agent=client.user_agent)

    if result.is_err():
        error = result.error
        if error.code in ("DOCUMENT_ALREADY_EXISTS", "EMAIL_ALREADY_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., min_length=1, description="Account password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    client: ClientInfo = Depends(ClientInfo),
    gateway: AuthGateway = Depends(get_auth_gateway),
):
    """
    Login

    Authenticates an account and returns a bearer token with the account,
    business and preferences.

    Raises:
        - 401 Unauthorized: Invalid credentials (same answer for unknown
          email, inactive account or business and wrong password)
        - 429 Too Many Requests: Too many attempts from this address
    """
    result = await gateway.login(
        request.email, request.password, client_ip=client.ip, user_agent=client.user_agent
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        if error.code == "RATE_LIMITED":
            raise rate_limited(error)
        raise ServerError(error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    client: ClientInfo = Depends(ClientInfo),
    principal: Principal = Depends(get_current_principal),
    raw_token: Optional[str] = Depends(get_bearer_token),
    gateway: AuthGateway = Depends(get_auth_gateway),
):
    """Ends the session of the presented token."""
    if raw_token is None:
        raise unauthorized()

    result = await gateway.logout(
        raw_token, principal, client_ip=client.ip, user_agent=client.user_agent
    )
    if result.is_err():
        raise ServerError(result.error)

    return LogoutResponse(
        message="Logged out", deactivated_sessions=result.value["deactivated"]
    )


@router.get("/me", status_code=status.HTTP_200_OK, response_model=SessionContextResponse)
async def me(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Account, business and preferences of the authenticated principal."""
    result = await LoadContextUseCase(uow).execute(principal)

    if result.is_err():
        error = result.error
        if error.code in ("ACCOUNT_NOT_FOUND", "BUSINESS_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get(
    "/routes", status_code=status.HTTP_200_OK, response_model=AccessibleRoutesResponse
)
async def accessible_routes(
    principal: Principal = Depends(get_current_principal),
    gateway: AuthGateway = Depends(get_auth_gateway),
):
    """Routes the principal may open, used to build the navigation menu."""
    routes = await gateway.list_accessible_routes(principal)
    return AccessibleRoutesResponse(
        routes=sorted(routes),
        account_id=str(principal.account_id),
        business_id=str(principal.business_id),
    )
