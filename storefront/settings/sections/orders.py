from pydantic import Field
from pydantic_settings import BaseSettings


class OrderSettings(BaseSettings):
    """Checkout and order management behaviour."""

    # Keep the caller's total on customer checkout (logged when it differs
    # from the item sum). False recomputes it server-side.
    trust_client_total: bool = True

    # Reject status changes that skip or reverse the lifecycle
    enforce_status_transitions: bool = True

    default_country: str = "United States"

    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "ORDERS_",
        "extra": "ignore",
    }
