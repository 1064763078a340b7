from typing import Optional

from src.app.services.token_service import InvalidTokenError, TokenService
from src.libs.result import Error, Result, Return
from .dtos import VerifyTokenResponse


class VerifyTokenUseCase:
    """
    Service-to-service token check.

    Signature and expiry only; access and refresh tokens are both accepted
    and the Session Store is not consulted.
    """

    def __init__(self, token_service: TokenService):
        self.token_service = token_service

    async def execute(self, token: Optional[str]) -> Result[VerifyTokenResponse]:
        if not token:
            return Return.err(Error("TOKEN_REQUIRED", "Token required"))

        try:
            claims = self.token_service.verify(token)
        except InvalidTokenError:
            return Return.err(Error("INVALID_TOKEN", "Invalid token"))

        return Return.ok(VerifyTokenResponse(valid=True, user=claims))
