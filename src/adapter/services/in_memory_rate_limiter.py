import time
from typing import Callable, Dict, Tuple

from src.app.services.rate_limiter import IRateLimiter, attempts_key


class InMemoryRateLimiter(IRateLimiter):
    """Per-process attempt counter; windows that have ended are swept on every hit"""

    def __init__(
        self,
        max_attempts: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(max_attempts, window_seconds)
        self._clock = clock
        self._windows: Dict[str, Tuple[int, float]] = {}

    async def hit(self, client_key: str) -> bool:
        now = self._clock()
        ended = [key for key, (_, ends_at) in self._windows.items() if now >= ends_at]
        for key in ended:
            del self._windows[key]

        key = attempts_key(client_key)
        count, ends_at = self._windows.get(key, (0, now + self.window_seconds))
        count += 1
        self._windows[key] = (count, ends_at)
        return count <= self.max_attempts
