from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Callable, Dict, Optional
from uuid import UUID

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.in_memory_rate_limiter import InMemoryRateLimiter
from src.adapter.services.in_memory_session_store import InMemorySessionStore
from src.adapter.services.in_memory_unit_of_work import InMemoryUnitOfWork
from src.adapter.services.redis_rate_limiter import RedisRateLimiter
from src.adapter.services.redis_session_store import RedisSessionStore
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import JwtTokenService
from src.app.services.password_hasher import PasswordHasher
from src.app.services.rate_limiter import IRateLimiter
from src.app.services.session_store import ISessionStore
from src.app.services.token_service import ACCESS_TOKEN, InvalidTokenError, TokenService
from src.domain.entities import User
from src.libs.result import Error


@dataclass
class Container:
    """
    Process-wide collaborators, built once per app and injected per request.

    Either ``session_factory`` (SQL Credential Store) is set, or users live
    in the ``users`` dict (in-memory Credential Store). Without a
    ``rate_limiter`` register and login are not throttled.
    """

    config: Any
    session_store: ISessionStore
    token_service: TokenService
    password_hasher: PasswordHasher
    engine: Optional[AsyncEngine] = None
    session_factory: Optional[Callable[[], AsyncSession]] = None
    users: Dict[UUID, User] = field(default_factory=dict)
    rate_limiter: Optional[IRateLimiter] = None

    async def close(self):
        await self.session_store.close()
        if self.rate_limiter is not None:
            await self.rate_limiter.close()
        if self.engine is not None:
            await self.engine.dispose()


def build_container(config) -> Container:
    """Create stores, token service and hasher from ApplicationConfig"""
    engine = None
    session_factory = None
    if config.CREDENTIAL_BACKEND == "sql":
        engine_kwargs = {"echo": False, "future": True}
        if not config.DB_URI.startswith("sqlite"):
            engine_kwargs["pool_timeout"] = config.OPERATION_TIMEOUT_SECONDS
        engine = create_async_engine(config.DB_URI, **engine_kwargs)
        session_factory = sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )
    elif config.CREDENTIAL_BACKEND != "memory":
        raise ValueError(f"Unknown credential backend: {config.CREDENTIAL_BACKEND}")

    if config.SESSION_BACKEND == "redis":
        session_store = RedisSessionStore(
            config.REDIS_URL, timeout_seconds=config.OPERATION_TIMEOUT_SECONDS
        )
    elif config.SESSION_BACKEND == "memory":
        session_store = InMemorySessionStore()
    else:
        raise ValueError(f"Unknown session backend: {config.SESSION_BACKEND}")

    # Attempt counters live next to the sessions
    rate_limiter = None
    if config.AUTH_RATE_LIMIT_MAX_ATTEMPTS > 0:
        if config.SESSION_BACKEND == "redis":
            rate_limiter = RedisRateLimiter(
                config.REDIS_URL,
                config.AUTH_RATE_LIMIT_MAX_ATTEMPTS,
                config.AUTH_RATE_LIMIT_WINDOW_SECONDS,
                timeout_seconds=config.OPERATION_TIMEOUT_SECONDS,
            )
        else:
            rate_limiter = InMemoryRateLimiter(
                config.AUTH_RATE_LIMIT_MAX_ATTEMPTS,
                config.AUTH_RATE_LIMIT_WINDOW_SECONDS,
            )

    token_service = JwtTokenService(
        config.JWT_SECRET,
        algorithm=config.JWT_ALGORITHM,
        access_ttl=timedelta(seconds=config.ACCESS_TOKEN_TTL_SECONDS),
        refresh_ttl=timedelta(seconds=config.REFRESH_TOKEN_TTL_SECONDS),
    )

    return Container(
        config=config,
        session_store=session_store,
        token_service=token_service,
        password_hasher=PasswordHasher(rounds=config.BCRYPT_ROUNDS),
        engine=engine,
        session_factory=session_factory,
        rate_limiter=rate_limiter,
    )


bearer = HTTPBearer(auto_error=False)


def get_container(request: Request) -> Container:
    return request.app.state.container


async def get_unit_of_work(container: Container = Depends(get_container)):
    if container.session_factory is None:
        yield InMemoryUnitOfWork(container.users)
        return
    async with container.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_session_store(container: Container = Depends(get_container)) -> ISessionStore:
    return container.session_store


def get_token_service(container: Container = Depends(get_container)) -> TokenService:
    return container.token_service


def get_password_hasher(container: Container = Depends(get_container)) -> PasswordHasher:
    return container.password_hasher


def get_refresh_ttl_seconds(container: Container = Depends(get_container)) -> int:
    return container.config.REFRESH_TOKEN_TTL_SECONDS


async def limit_auth_attempts(
    request: Request, container: Container = Depends(get_container)
) -> None:
    """Count a register/login attempt for the calling client; 429 once over the limit"""
    if container.rate_limiter is None:
        return
    client_key = request.client.host if request.client else "unknown"
    if not await container.rate_limiter.hit(client_key):
        raise ClientError(
            Error("TOO_MANY_REQUESTS", "Too many authentication attempts"),
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> Optional[str]:
    """Bearer token from the Authorization header, or None when absent"""
    if credentials is None:
        return None
    return credentials.credentials


async def get_current_user(
    token: Optional[str] = Depends(get_bearer_token),
    token_service: TokenService = Depends(get_token_service),
) -> dict:
    """
    Dependency to extract and verify JWT access token from Authorization header.

    Args:
        token: Bearer token from Authorization header

    Returns:
        Decoded JWT payload containing id, email, username

    Raises:
        ClientError: 401 if token is missing, invalid or expired
    """
    if not token:
        raise ClientError(
            Error("ACCESS_TOKEN_REQUIRED", "Access token required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    try:
        return token_service.verify(token, expected_type=ACCESS_TOKEN)
    except InvalidTokenError:
        raise ClientError(
            Error("INVALID_TOKEN", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
