from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID


class ISessionStore(ABC):
    """
    Session Store interface - maps a user id to its one valid refresh token.

    put() overwrites, so issuing a new refresh token invalidates the previous
    one. Every operation is idempotent; atomicity is per key only.
    """

    @abstractmethod
    async def put(self, user_id: UUID, refresh_token: str, ttl_seconds: int) -> None:
        """Store refresh token for user, replacing any previous one"""
        pass

    @abstractmethod
    async def get(self, user_id: UUID) -> Optional[str]:
        """Get the current refresh token for user, or None"""
        pass

    @abstractmethod
    async def delete(self, user_id: UUID) -> None:
        """Forget the refresh token for user"""
        pass

    async def close(self) -> None:
        """Release any underlying connection"""
        pass


def session_key(user_id: UUID) -> str:
    return f"refresh_token:{user_id}"
