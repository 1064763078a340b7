"""Redis-backed attempt counter shared by every service instance."""

import logging
from typing import Optional

import redis.asyncio as redis

from src.app.services.rate_limiter import IRateLimiter, attempts_key

logger = logging.getLogger(__name__)


class RedisRateLimiter(IRateLimiter):
    """Counts attempts with INCR on ``auth_attempts:<client>``; the first hit sets the expiry"""

    def __init__(
        self,
        url: str,
        max_attempts: int,
        window_seconds: int,
        timeout_seconds: float = 5,
        client: Optional[redis.Redis] = None,
    ):
        super().__init__(max_attempts, window_seconds)
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._client = client

    def _get_client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(
                self.url,
                decode_responses=True,
                socket_timeout=self.timeout_seconds,
                socket_connect_timeout=self.timeout_seconds,
            )
        return self._client

    async def hit(self, client_key: str) -> bool:
        client = self._get_client()
        key = attempts_key(client_key)
        count = await client.incr(key)
        if count == 1:
            await client.expire(key, self.window_seconds)
        return count <= self.max_attempts

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Redis rate limiter client closed")
