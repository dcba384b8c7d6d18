from typing import Literal

from pydantic_settings import BaseSettings


class RateLimitSettings(BaseSettings):
    """
    Rate limiting settings.

    ``memory`` keeps counters in the process and is only correct for a
    single instance; use ``redis`` when running several.
    """

    backend: Literal["memory", "redis"] = "memory"
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = "storefront:ratelimit:"

    # Order creation: 3 per minute per identity + client IP
    orders_window_seconds: int = 60
    orders_max_requests: int = 3

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "RATE_LIMIT_",
        "extra": "ignore",
    }
