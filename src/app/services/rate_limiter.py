from abc import ABC, abstractmethod


class IRateLimiter(ABC):
    """
    Fixed-window attempt counter keyed by client.

    hit() records one attempt and tells whether it is still within the limit.
    The first attempt of a client opens its window; the count resets once the
    window has passed.
    """

    def __init__(self, max_attempts: int, window_seconds: int):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds

    @abstractmethod
    async def hit(self, client_key: str) -> bool:
        """Record an attempt; False when the client is over the limit"""
        pass

    async def close(self) -> None:
        """Release any underlying connection"""
        pass


def attempts_key(client_key: str) -> str:
    return f"auth_attempts:{client_key}"
