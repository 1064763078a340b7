"""Redis-backed Session Store."""

import logging
from typing import Optional
from uuid import UUID

import redis.asyncio as redis

from src.app.services.session_store import ISessionStore, session_key

logger = logging.getLogger(__name__)


class RedisSessionStore(ISessionStore):
    """Session Store keeping ``refresh_token:<user id>`` keys with a TTL.

    The client is created lazily from ``url`` unless one is injected.
    """

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 5,
        client: Optional[redis.Redis] = None,
    ):
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._client = client

    def _get_client(self) -> redis.Redis:
        """Get or create Redis client."""
        if self._client is None:
            self._client = redis.from_url(
                self.url,
                decode_responses=True,
                socket_timeout=self.timeout_seconds,
                socket_connect_timeout=self.timeout_seconds,
            )
            logger.info("Redis client created for %s", self.url)
        return self._client

    async def put(self, user_id: UUID, refresh_token: str, ttl_seconds: int) -> None:
        await self._get_client().set(session_key(user_id), refresh_token, ex=ttl_seconds)

    async def get(self, user_id: UUID) -> Optional[str]:
        return await self._get_client().get(session_key(user_id))

    async def delete(self, user_id: UUID) -> None:
        await self._get_client().delete(session_key(user_id))

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Redis client closed")
