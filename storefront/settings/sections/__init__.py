from .api import ApiSettings
from .database import DatabaseSettings
from .orders import OrderSettings
from .rate_limit import RateLimitSettings

__all__ = ["ApiSettings", "DatabaseSettings", "OrderSettings", "RateLimitSettings"]
