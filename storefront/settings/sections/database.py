from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    """
    Database configuration settings.

    Loaded from environment variables or .env file.
    """

    # SQLite for local development, postgresql+asyncpg://... in production
    database_url: str = "sqlite+aiosqlite:///./storefront.db"

    # Connection pool settings (ignored for SQLite)
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    pool_recycle: int = 3600  # 1 hour

    # Echo SQL (for debugging)
    echo_sql: bool = False

    # Create missing tables on startup
    create_tables: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "DB_",
        "extra": "ignore",
    }
