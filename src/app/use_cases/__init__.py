"""
Use Cases

Organized into domain folders:
- auth/: Authentication flows
- users/: Current user lookup
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    RefreshTokenUseCase,
    LogoutUseCase,
    VerifyTokenUseCase,
)
from .users import GetCurrentUserUseCase

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "VerifyTokenUseCase",
    # Users
    "GetCurrentUserUseCase",
]
