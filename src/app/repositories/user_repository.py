from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import User


class DuplicateUserError(Exception):
    """Raised by create() when email or username is already taken"""


class IUserRepository(ABC):
    """User repository interface - application layer (Credential Store)"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def find_by_email_or_username(
        self, email: str, username: str
    ) -> Optional[User]:
        """Get any user whose email or username matches"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises DuplicateUserError on a uniqueness violation."""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass
