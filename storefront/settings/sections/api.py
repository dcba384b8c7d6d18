from typing import List

from pydantic_settings import BaseSettings


class ApiSettings(BaseSettings):
    """HTTP layer settings."""

    title: str = "Storefront Orders API"
    version: str = "1.0.0"
    cors_origins: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "API_",
        "extra": "ignore",
    }
