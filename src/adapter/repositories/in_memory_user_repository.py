from datetime import datetime
from typing import Dict, Optional
from uuid import UUID

from src.app.repositories.user_repository import DuplicateUserError, IUserRepository
from src.domain.entities import User


class InMemoryUserRepository(IUserRepository):
    """
    Volatile Credential Store backend.

    Keeps users in a dict shared with the owning unit of work; nothing
    survives a restart. Intended for tests and local prototyping.
    """

    def __init__(self, users: Dict[UUID, User]):
        self._users = users

    async def get_by_email(self, email: str) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        return self._users.get(user_id)

    async def find_by_email_or_username(
        self, email: str, username: str
    ) -> Optional[User]:
        for user in self._users.values():
            if user.email == email or user.username == username:
                return user
        return None

    async def create(self, user: User) -> User:
        for existing in self._users.values():
            if existing.email == user.email or existing.username == user.username:
                raise DuplicateUserError("email or username already taken")
        self._users[user.id] = user
        return user

    async def update(self, user: User) -> User:
        user.updated_at = datetime.utcnow()
        self._users[user.id] = user
        return user
