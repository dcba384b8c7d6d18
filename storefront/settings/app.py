from functools import lru_cache

from storefront.settings.sections import (
    ApiSettings,
    DatabaseSettings,
    OrderSettings,
    RateLimitSettings,
)


class AppSettings:
    """
    Central application settings aggregator.
    Settings are loaded lazily inside __init__
    to prevent eager evaluation at import time.
    """

    def __init__(self):
        self.api = ApiSettings()
        self.database = DatabaseSettings()
        self.orders = OrderSettings()
        self.rate_limit = RateLimitSettings()


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    return AppSettings()
