import logging
from typing import Optional
from uuid import UUID

from src.app.services.session_store import ISessionStore
from src.app.services.token_service import ACCESS_TOKEN, InvalidTokenError, TokenService
from src.libs.result import Result, Return
from .dtos import LogoutResponse

LOGGED_OUT = "Logged out successfully"


class LogoutUseCase:
    """
    Use case for logout.

    Best effort: drops the caller's session entry when the access token
    decodes, and reports success no matter what happened, so a client can
    always clear its local state.
    """

    def __init__(
        self,
        session_store: ISessionStore,
        token_service: TokenService,
        logger: Optional[logging.Logger] = None,
    ):
        self.session_store = session_store
        self.token_service = token_service
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, access_token: Optional[str]) -> Result[LogoutResponse]:
        if access_token:
            try:
                claims = self.token_service.verify(access_token, expected_type=ACCESS_TOKEN)
                user_id = UUID(claims["id"])
                await self.session_store.delete(user_id)
                self.logger.info(f"User logged out: {user_id}")
            except (InvalidTokenError, ValueError) as exc:
                self.logger.info(f"Logout with unusable token: {exc}")
            except Exception:
                # Never block sign-out on a backend failure
                self.logger.exception("Logout error")

        return Return.ok(LogoutResponse(message=LOGGED_OUT))
