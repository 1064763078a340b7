import time
from typing import Callable, Dict, Optional, Tuple
from uuid import UUID

from src.app.services.session_store import ISessionStore, session_key


class InMemorySessionStore(ISessionStore):
    """
    Volatile Session Store with TTL.

    Expired entries are dropped when read and swept on every put. ``clock``
    returns seconds and defaults to time.monotonic; tests pass their own to
    move time forward.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}

    def _sweep(self, now: float) -> None:
        expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]

    async def put(self, user_id: UUID, refresh_token: str, ttl_seconds: int) -> None:
        now = self._clock()
        self._sweep(now)
        self._entries[session_key(user_id)] = (refresh_token, now + ttl_seconds)

    async def get(self, user_id: UUID) -> Optional[str]:
        key = session_key(user_id)
        entry = self._entries.get(key)
        if entry is None:
            return None
        token, expires_at = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return token

    async def delete(self, user_id: UUID) -> None:
        self._entries.pop(session_key(user_id), None)
