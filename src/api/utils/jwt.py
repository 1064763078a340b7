from datetime import UTC, datetime, timedelta
from typing import Any, Callable, Dict, Optional
from uuid import uuid4

from jose import JWTError, jwt

from src.app.services.token_service import (
    ACCESS_TOKEN,
    REFRESH_TOKEN,
    InvalidTokenError,
    TokenPair,
    TokenService,
)
from src.domain.entities import User


class JwtTokenService(TokenService):
    """
    JWT implementation of TokenService on python-jose.

    Both tokens are signed with the same key. For HMAC algorithms
    ``signing_key`` is the shared secret; for asymmetric ones pass the
    private key as ``signing_key`` and the public key as ``verify_key``.
    """

    def __init__(
        self,
        signing_key: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
        verify_key: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.signing_key = signing_key
        self.verify_key = verify_key or signing_key
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.clock = clock or (lambda: datetime.now(UTC))

    def issue(self, user: User) -> TokenPair:
        """
        Generate access and refresh tokens for a user

        Args:
            user: User entity

        Returns:
            TokenPair (access: 15-minute expiry, refresh: 7-day expiry by default)
        """
        access_token = self._encode(
            {"id": str(user.id), "email": user.email, "username": user.username},
            ACCESS_TOKEN,
            self.access_ttl,
        )
        refresh_token = self._encode({"id": str(user.id)}, REFRESH_TOKEN, self.refresh_ttl)
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    def verify(self, token: str, expected_type: Optional[str] = None) -> Dict[str, Any]:
        """
        Verify and decode JWT token

        Args:
            token: JWT token string
            expected_type: "access" or "refresh" to also check the token type

        Returns:
            Decoded payload dict

        Raises:
            InvalidTokenError: bad signature, malformed, expired or wrong type
        """
        if not token:
            raise InvalidTokenError("Token is empty")
        try:
            payload = jwt.decode(token, self.verify_key, algorithms=[self.algorithm])
        except JWTError as exc:
            raise InvalidTokenError(str(exc)) from exc

        if "id" not in payload:
            raise InvalidTokenError("Token has no subject")
        if expected_type is not None and payload.get("type") != expected_type:
            raise InvalidTokenError(f"Expected {expected_type} token")
        return payload

    def _encode(self, claims: Dict[str, Any], token_type: str, ttl: timedelta) -> str:
        now = self.clock()
        payload = {
            **claims,
            "type": token_type,
            # Unique per token so two pairs issued in the same second differ
            "jti": uuid4().hex,
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(payload, self.signing_key, algorithm=self.algorithm)
