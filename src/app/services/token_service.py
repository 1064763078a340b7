from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from src.domain.entities import User

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


class InvalidTokenError(Exception):
    """Token signature, format, type or expiry check failed"""


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenService(ABC):
    """
    Issues and verifies signed bearer tokens.

    Implementations are pure: output depends only on the input, the
    configured key material and the clock. Verification never looks at
    the Session Store; callers enforce refresh-token revocation.
    """

    @abstractmethod
    def issue(self, user: User) -> TokenPair:
        """Issue access token {id, email, username} and refresh token {id}"""
        pass

    @abstractmethod
    def verify(self, token: str, expected_type: Optional[str] = None) -> Dict[str, Any]:
        """Return decoded claims or raise InvalidTokenError"""
        pass
