"""Rate limiting with pluggable counter stores."""

from .limiter import (
    RateLimiter,
    RateLimitResult,
    create_order_rate_limiter,
    create_rate_limit_store,
    rate_limit_headers,
)
from .stores import InMemoryRateLimitStore, RateLimitStore, RedisRateLimitStore

__all__ = [
    "InMemoryRateLimitStore",
    "RateLimitResult",
    "RateLimitStore",
    "RateLimiter",
    "RedisRateLimitStore",
    "create_order_rate_limiter",
    "create_rate_limit_store",
    "rate_limit_headers",
]
