"""
Refresh Token Use Case

Exchanges a refresh token for a new pair, rotating the stored token.
"""

import hmac
import logging
from typing import Optional
from uuid import UUID

from src.app.services.session_store import ISessionStore
from src.app.services.token_service import REFRESH_TOKEN, InvalidTokenError, TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import TokenPairResponse
from .register_use_case import REFRESH_TOKEN_TTL_SECONDS

INVALID_REFRESH_TOKEN = Error("INVALID_REFRESH_TOKEN", "Invalid refresh token")


class RefreshTokenUseCase:
    """
    Use case for refreshing JWT access tokens.

    Business Rules:
    - Refresh token rotation: old token invalidated, new token issued
    - Token must verify (signature, expiry, type) AND equal the stored one;
      a rotated-out, logged-out or tampered token fails with the same error
    - User must still exist
    """

    def __init__(
        self,
        uow: UnitOfWork,
        session_store: ISessionStore,
        token_service: TokenService,
        refresh_ttl_seconds: int = REFRESH_TOKEN_TTL_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        self.uow = uow
        self.session_store = session_store
        self.token_service = token_service
        self.refresh_ttl_seconds = refresh_ttl_seconds
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, refresh_token: Optional[str]) -> Result[TokenPairResponse]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token to verify and rotate

        Returns:
            Result with TokenPairResponse containing new tokens, or Error
        """
        if not refresh_token:
            return Return.err(Error("REFRESH_TOKEN_REQUIRED", "Refresh token required"))

        try:
            claims = self.token_service.verify(refresh_token, expected_type=REFRESH_TOKEN)
            user_id = UUID(claims["id"])
        except (InvalidTokenError, ValueError) as exc:
            self.logger.warning(f"Token refresh rejected: {exc}")
            return Return.err(INVALID_REFRESH_TOKEN)

        stored_token = await self.session_store.get(user_id)
        if stored_token is None or not hmac.compare_digest(
            stored_token.encode(), refresh_token.encode()
        ):
            self.logger.warning(f"Token refresh with stale refresh token: {user_id}")
            return Return.err(INVALID_REFRESH_TOKEN)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)

            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            tokens = self.token_service.issue(user)
            await self.session_store.put(
                user.id, tokens.refresh_token, self.refresh_ttl_seconds
            )

            return Return.ok(
                TokenPairResponse(
                    access_token=tokens.access_token,
                    refresh_token=tokens.refresh_token,
                )
            )
