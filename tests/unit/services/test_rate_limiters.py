from unittest.mock import AsyncMock

import pytest

from src.adapter.services.in_memory_rate_limiter import InMemoryRateLimiter
from src.adapter.services.redis_rate_limiter import RedisRateLimiter


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.mark.asyncio
async def test_in_memory_allows_up_to_max_attempts():
    limiter = InMemoryRateLimiter(max_attempts=3, window_seconds=60)

    results = [await limiter.hit("10.0.0.1") for _ in range(4)]

    assert results == [True, True, True, False]


@pytest.mark.asyncio
async def test_in_memory_counts_clients_separately():
    limiter = InMemoryRateLimiter(max_attempts=1, window_seconds=60)

    assert await limiter.hit("10.0.0.1")
    assert not await limiter.hit("10.0.0.1")
    assert await limiter.hit("10.0.0.2")


@pytest.mark.asyncio
async def test_in_memory_window_is_fixed_from_first_attempt():
    clock = FakeClock()
    limiter = InMemoryRateLimiter(max_attempts=2, window_seconds=60, clock=clock)

    assert await limiter.hit("10.0.0.1")
    clock.now += 30
    assert await limiter.hit("10.0.0.1")
    clock.now += 29
    assert not await limiter.hit("10.0.0.1")

    clock.now += 1
    assert await limiter.hit("10.0.0.1")


@pytest.mark.asyncio
async def test_in_memory_sweeps_ended_windows():
    clock = FakeClock()
    limiter = InMemoryRateLimiter(max_attempts=5, window_seconds=60, clock=clock)
    await limiter.hit("10.0.0.1")

    clock.now += 60
    await limiter.hit("10.0.0.2")

    assert set(limiter._windows) == {"auth_attempts:10.0.0.2"}


@pytest.fixture
def redis_client():
    return AsyncMock()


@pytest.mark.asyncio
async def test_redis_first_attempt_sets_expiry(redis_client):
    redis_client.incr.return_value = 1
    limiter = RedisRateLimiter("redis://localhost:6379/0", 5, 900, client=redis_client)

    assert await limiter.hit("10.0.0.1")

    redis_client.incr.assert_awaited_once_with("auth_attempts:10.0.0.1")
    redis_client.expire.assert_awaited_once_with("auth_attempts:10.0.0.1", 900)


@pytest.mark.asyncio
async def test_redis_over_limit(redis_client):
    redis_client.incr.return_value = 6
    limiter = RedisRateLimiter("redis://localhost:6379/0", 5, 900, client=redis_client)

    assert not await limiter.hit("10.0.0.1")

    redis_client.expire.assert_not_awaited()


@pytest.mark.asyncio
async def test_redis_close(redis_client):
    limiter = RedisRateLimiter("redis://localhost:6379/0", 5, 900, client=redis_client)

    await limiter.close()
    await limiter.close()

    redis_client.aclose.assert_awaited_once()
