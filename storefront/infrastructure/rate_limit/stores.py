"""
Counter stores for the fixed-window rate limiter.

The in-memory store is process local: every instance of the service
counts on its own. The Redis store shares counters between instances.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

import redis.asyncio as aioredis


logger = logging.getLogger(__name__)


class RateLimitStore(ABC):
    """Storage for per-key request counters with a window expiry."""

    @abstractmethod
    async def increment(self, key: str, window_seconds: float, now: float) -> Tuple[int, float]:
        """
        Count one request for ``key``.

        A key whose window has expired starts a new window of
        ``window_seconds`` beginning at ``now``.

        Returns:
            (request count in the current window, window reset time as epoch seconds)
        """
        pass

    async def close(self) -> None:
        """Release resources held by the store."""
        return None


class InMemoryRateLimitStore(RateLimitStore):
    """Dictionary backed store; expired windows are purged periodically."""

    def __init__(self, cleanup_interval: float = 300.0):
        self._windows: Dict[str, Tuple[int, float]] = {}
        self._lock = asyncio.Lock()
        self._cleanup_interval = cleanup_interval
        self._last_cleanup = 0.0

    async def increment(self, key: str, window_seconds: float, now: float) -> Tuple[int, float]:
        async with self._lock:
            self._purge_expired(now)

            count, reset_at = self._windows.get(key, (0, 0.0))
            if reset_at < now:
                count, reset_at = 0, now + window_seconds

            count += 1
            self._windows[key] = (count, reset_at)
            return count, reset_at

    def __len__(self) -> int:
        return len(self._windows)

    def _purge_expired(self, now: float) -> None:
        if now - self._last_cleanup < self._cleanup_interval:
            return
        self._last_cleanup = now
        expired = [key for key, (_, reset_at) in self._windows.items() if reset_at < now]
        for key in expired:
            del self._windows[key]
        if expired:
            logger.debug(f"Purged {len(expired)} expired rate limit window(s)")


class RedisRateLimitStore(RateLimitStore):
    """
    Redis backed store.

    Each key is an integer counter whose TTL is the remaining window, so
    Redis expires finished windows on its own.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        key_prefix: str = "storefront:ratelimit:",
        client: Optional[aioredis.Redis] = None,
    ):
        """
        Initialize Redis store.

        Args:
            redis_url: Redis connection URL
            key_prefix: Prefix applied to every counter key
            client: Pre-built client (mainly for tests)
        """
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self._redis_client: Optional[aioredis.Redis] = client

    def _client(self) -> aioredis.Redis:
        if self._redis_client is None:
            self._redis_client = aioredis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            logger.info(f"✅ Rate limiter using Redis: {self.redis_url}")
        return self._redis_client

    async def increment(self, key: str, window_seconds: float, now: float) -> Tuple[int, float]:
        client = self._client()
        redis_key = f"{self.key_prefix}{key}"
        window_ms = int(window_seconds * 1000)

        async with client.pipeline(transaction=True) as pipe:
            pipe.incr(redis_key)
            pipe.pttl(redis_key)
            count, ttl_ms = await pipe.execute()

        # First hit of a window (or a counter left without TTL): start the clock
        if ttl_ms is None or ttl_ms < 0:
            await client.pexpire(redis_key, window_ms)
            ttl_ms = window_ms

        return int(count), now + ttl_ms / 1000

    async def close(self) -> None:
        if self._redis_client is not None:
            await self._redis_client.aclose()
            self._redis_client = None
            logger.info("✅ Disconnected from Redis")
