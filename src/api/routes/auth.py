from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import Field

from src.api.error import ClientError, ServerError
from src.app.services.password_hasher import PasswordHasher
from src.app.services.session_store import ISessionStore
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthResponse,
    LoginCommand,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
    TokenPairResponse,
    VerifyTokenResponse,
    VerifyTokenUseCase,
)
from src.app.use_cases.auth.dtos import CamelModel
from src.depends import (
    get_bearer_token,
    get_password_hasher,
    get_refresh_ttl_seconds,
    get_session_store,
    get_token_service,
    get_unit_of_work,
    limit_auth_attempts,
)

router = APIRouter(tags=["Authentication"])


class RegisterRequest(CamelModel):
    """
    Register HTTP request payload

    Only JSON types are checked here. Field rules (email format, lengths,
    username charset) live in RegisterUseCase so that every violation is
    reported together.
    """

    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password (min 8 chars)")
    username: Optional[str] = Field(None, description="Alphanumeric, 3-30 chars")
    first_name: Optional[str] = Field(None, description="1-50 chars")
    last_name: Optional[str] = Field(None, description="1-50 chars")


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    dependencies=[Depends(limit_auth_attempts)],
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_store: ISessionStore = Depends(get_session_store),
    token_service: TokenService = Depends(get_token_service),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    refresh_ttl_seconds: int = Depends(get_refresh_ttl_seconds),
):
    """
    User Registration

    Creates a new user account and signs it in.
    Returns the user view with an access token and a refresh token.

    Raises:
        - 400 Bad Request: Invalid input, one entry per offending field
        - 409 Conflict: Email or username already taken
        - 429 Too Many Requests: Too many register/login attempts from this client
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        email=request.email,
        password=request.password,
        username=request.username,
        first_name=request.first_name,
        last_name=request.last_name,
    )

    use_case = RegisterUseCase(
        uow, session_store, token_service, password_hasher, refresh_ttl_seconds
    )
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == "USER_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(CamelModel):
    """Login HTTP request payload"""

    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=AuthResponse,
    dependencies=[Depends(limit_auth_attempts)],
)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_store: ISessionStore = Depends(get_session_store),
    token_service: TokenService = Depends(get_token_service),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    refresh_ttl_seconds: int = Depends(get_refresh_ttl_seconds),
):
    """
    User Login

    Authenticates user and returns a new token pair. Any refresh token
    issued earlier for this user stops working.

    Raises:
        - 400 Bad Request: Invalid input
        - 401 Unauthorized: Invalid credentials (same for unknown email and wrong password)
        - 429 Too Many Requests: Too many register/login attempts from this client
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(
        uow, session_store, token_service, password_hasher, refresh_ttl_seconds
    )
    result = await use_case.execute(
        LoginCommand(email=request.email, password=request.password)
    )

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


class RefreshRequest(CamelModel):
    """Refresh token HTTP request payload"""

    refresh_token: Optional[str] = Field(None, description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=TokenPairResponse)
async def refresh(
    request: RefreshRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_store: ISessionStore = Depends(get_session_store),
    token_service: TokenService = Depends(get_token_service),
    refresh_ttl_seconds: int = Depends(get_refresh_ttl_seconds),
):
    """
    Refresh JWT Token

    Exchanges the current refresh token for a new pair (rotation).

    Raises:
        - 401 Unauthorized: Refresh token missing
        - 403 Forbidden: Invalid, expired, rotated-out or logged-out refresh token
        - 404 Not Found: User no longer exists
        - 500 Internal Server Error: Server error
    """
    use_case = RefreshTokenUseCase(uow, session_store, token_service, refresh_ttl_seconds)
    result = await use_case.execute(request.refresh_token)

    if result.is_err():
        error = result.error
        if error.code == "REFRESH_TOKEN_REQUIRED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        if error.code == "INVALID_REFRESH_TOKEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    token: Optional[str] = Depends(get_bearer_token),
    session_store: ISessionStore = Depends(get_session_store),
    token_service: TokenService = Depends(get_token_service),
):
    """
    Logout

    Revokes the caller's refresh token when a valid access token is sent.
    Always returns 200, even without or with a broken Authorization header.
    """
    use_case = LogoutUseCase(session_store, token_service)
    result = await use_case.execute(token)
    return result.value


class VerifyRequest(CamelModel):
    """Verify token HTTP request payload"""

    token: Optional[str] = Field(None, description="Token to verify")


@router.post("/verify", status_code=status.HTTP_200_OK, response_model=VerifyTokenResponse)
async def verify(
    request: VerifyRequest,
    token_service: TokenService = Depends(get_token_service),
):
    """
    Verify Token (service-to-service)

    Checks signature and expiry and returns the claims.

    Returns:
        - 200 OK: {valid: true, user: claims}
        - 401 Unauthorized: {valid: false, error}
    """
    use_case = VerifyTokenUseCase(token_service)
    result = await use_case.execute(request.token)

    if result.is_err():
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"valid": False, "error": result.error.message},
        )

    return result.value
