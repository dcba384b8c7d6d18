"""Fixed-window rate limiting."""
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from storefront.settings.sections import RateLimitSettings

from .stores import InMemoryRateLimitStore, RateLimitStore, RedisRateLimitStore


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of one counted request."""

    allowed: bool
    remaining: int
    reset_at: float  # epoch seconds


class RateLimiter:
    """
    Allow at most ``max_requests`` per key within a window.

    Every call counts, including rejected ones, so a client that keeps
    retrying stays blocked until the window resets.
    """

    def __init__(
        self,
        store: RateLimitStore,
        window_seconds: float,
        max_requests: int,
        clock: Callable[[], float] = time.time,
    ):
        if window_seconds <= 0 or max_requests < 1:
            raise ValueError("window_seconds and max_requests must be positive")
        self.store = store
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self._clock = clock

    async def hit(self, identifier: str) -> RateLimitResult:
        count, reset_at = await self.store.increment(
            identifier, self.window_seconds, self._clock()
        )
        return RateLimitResult(
            allowed=count <= self.max_requests,
            remaining=max(0, self.max_requests - count),
            reset_at=reset_at,
        )


def rate_limit_headers(result: RateLimitResult) -> Dict[str, str]:
    """Response headers describing the caller's remaining budget."""
    return {
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(math.ceil(result.reset_at)),
    }


def create_rate_limit_store(settings: RateLimitSettings) -> RateLimitStore:
    if settings.backend == "redis":
        return RedisRateLimitStore(redis_url=settings.redis_url, key_prefix=settings.key_prefix)
    return InMemoryRateLimitStore()


def create_order_rate_limiter(
    settings: RateLimitSettings,
    store: Optional[RateLimitStore] = None,
) -> RateLimiter:
    """Limiter guarding order creation."""
    return RateLimiter(
        store=store or create_rate_limit_store(settings),
        window_seconds=settings.orders_window_seconds,
        max_requests=settings.orders_max_requests,
    )
