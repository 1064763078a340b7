"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
Responses serialize with camelCase keys (firstName, accessToken, ...).
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.domain.entities import User


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - raw registration intent

    Fields stay optional here; RegisterUseCase reports every missing or
    malformed field in one VALIDATION_ERROR.
    """

    email: Optional[str] = None
    password: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class LoginCommand(BaseModel):
    """Login command - raw credentials"""

    email: Optional[str] = None
    password: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserView(CamelModel):
    """Public user view - never carries the password hash"""

    id: str
    email: str
    username: str
    first_name: str
    last_name: str

    @classmethod
    def from_user(cls, user: User) -> "UserView":
        return cls(
            id=str(user.id),
            email=user.email,
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
        )


class AuthResponse(CamelModel):
    """Response for register and login use cases"""

    user: UserView
    access_token: str
    refresh_token: str


class TokenPairResponse(CamelModel):
    """Response for refresh token use case"""

    access_token: str
    refresh_token: str


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    message: str


class VerifyTokenResponse(BaseModel):
    """Response for verify token use case"""

    valid: bool
    user: Dict[str, Any]
