"""
Login Use Case

Handles user authentication and returns a fresh token pair.
"""

import logging
from datetime import datetime
from typing import Optional

from src.app.services.password_hasher import PasswordHasher
from src.app.services.session_store import ISessionStore
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import AuthResponse, LoginCommand, UserView
from .register_use_case import REFRESH_TOKEN_TTL_SECONDS
from .validation import LoginInput, validate_input

# Same error for unknown email and wrong password (no user enumeration)
INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid credentials")


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown email and wrong password are indistinguishable to the caller
    - New refresh token replaces the stored one (previous token stops working)
    - Updates user.last_login_at
    """

    def __init__(
        self,
        uow: UnitOfWork,
        session_store: ISessionStore,
        token_service: TokenService,
        password_hasher: PasswordHasher,
        refresh_ttl_seconds: int = REFRESH_TOKEN_TTL_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        self.uow = uow
        self.session_store = session_store
        self.token_service = token_service
        self.password_hasher = password_hasher
        self.refresh_ttl_seconds = refresh_ttl_seconds
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, command: LoginCommand) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            command: LoginCommand with email and plain text password

        Returns:
            Result with AuthResponse containing user view and tokens, or Error
        """
        validated = validate_input(LoginInput, command.model_dump(exclude_none=True))
        if validated.is_err():
            return validated

        async with self.uow:
            user = await self.uow.users.get_by_email(command.email)

            if user is None:
                # Hash anyway to keep response time independent of account existence
                self.password_hasher.burn(command.password)
                return Return.err(INVALID_CREDENTIALS)

            if not self.password_hasher.verify(command.password, user.password_hash):
                return Return.err(INVALID_CREDENTIALS)

            tokens = self.token_service.issue(user)
            await self.session_store.put(
                user.id, tokens.refresh_token, self.refresh_ttl_seconds
            )

            user.last_login_at = datetime.utcnow()
            user = await self.uow.users.update(user)

            await self.uow.commit()

            self.logger.info(f"User logged in successfully: {user.id}")

            return Return.ok(
                AuthResponse(
                    user=UserView.from_user(user),
                    access_token=tokens.access_token,
                    refresh_token=tokens.refresh_token,
                )
            )
