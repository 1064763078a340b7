"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .verify_token_use_case import VerifyTokenUseCase
from .dtos import (
    RegisterCommand,
    LoginCommand,
    UserView,
    AuthResponse,
    TokenPairResponse,
    LogoutResponse,
    VerifyTokenResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "VerifyTokenUseCase",
    # DTOs - Commands
    "RegisterCommand",
    "LoginCommand",
    # DTOs - Responses
    "AuthResponse",
    "TokenPairResponse",
    "LogoutResponse",
    "VerifyTokenResponse",
    # DTOs - Nested Models
    "UserView",
]
