"""API configuration from environment variables."""

import os
from functools import lru_cache


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Settings:
    """API configuration settings loaded from environment variables."""

    # API Metadata
    API_TITLE: str = "meterbill REST API"
    API_DESCRIPTION: str = """
    REST API for tracking meter readings and estimating electricity bills.

    ## Features

    * **JWT Authentication** - Register and log in with a local account
    * **Profiles** - One profile per tenant and meter
    * **Readings** - Record meter readings, consumption is computed for you
    * **Bill Estimates** - Slab tariff with duty, GST and surcharges
    * **Rate Limited** - Prevents API abuse

    ## Usage

    ```bash
    python -m meterbill serve --host 0.0.0.0 --port 8000
    ```
    """
    API_VERSION: str = "1.0.0"
    API_LICENSE: dict = {"name": "MIT"}

    def __init__(self):
        # Server configuration
        self.API_HOST: str = os.getenv("METERBILL_API_HOST", "127.0.0.1")
        self.API_PORT: int = int(os.getenv("METERBILL_API_PORT", "8000"))
        self.API_WORKERS: int = int(os.getenv("METERBILL_API_WORKERS", "1"))
        self.API_RELOAD: bool = _env_bool("METERBILL_API_RELOAD", "false")

        # JWT Configuration
        self.JWT_SECRET: str = os.getenv("METERBILL_JWT_SECRET", "CHANGE_ME_IN_PRODUCTION")
        self.JWT_ALGORITHM: str = os.getenv("METERBILL_JWT_ALGORITHM", "HS256")
        self.JWT_EXPIRATION: int = int(os.getenv("METERBILL_JWT_EXPIRATION", "86400"))  # 24 hours

        # Rate Limiting
        self.RATE_LIMIT: int = int(os.getenv("METERBILL_API_RATE_LIMIT", "100"))
        self.RATE_WINDOW: int = int(os.getenv("METERBILL_API_RATE_WINDOW", "3600"))  # 1 hour

        # Storage
        self.DB_PATH: str = os.getenv("METERBILL_DB_PATH", "data/meterbill.db")
        self.CACHE_PATH: str = os.getenv("METERBILL_CACHE_PATH", "data")
        self.CACHE_MEMORY_SIZE: int = int(os.getenv("METERBILL_CACHE_MEMORY_SIZE", "1000"))
        self.CACHE_TTL_PROFILES: int = int(os.getenv("METERBILL_CACHE_TTL_PROFILES", "300"))  # 5 min

        # Background Jobs
        self.ENABLE_SCHEDULER: bool = _env_bool("METERBILL_ENABLE_SCHEDULER", "true")
        self.CLEANUP_INTERVAL: int = int(os.getenv("METERBILL_CLEANUP_INTERVAL", "60"))  # minutes

        # Readings returned per listing when no limit is given
        self.READINGS_PAGE_SIZE: int = int(os.getenv("METERBILL_READINGS_PAGE_SIZE", "10"))

    def __repr__(self) -> str:
        """Return string representation of settings."""
        return (
            f"Settings(API_HOST={self.API_HOST!r}, API_PORT={self.API_PORT}, "
            f"JWT_SECRET={'***' if self.JWT_SECRET != 'CHANGE_ME_IN_PRODUCTION' else 'DEFAULT'}, "
            f"DB_PATH={self.DB_PATH!r})"
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns
    -------
    Settings
        Application settings loaded from environment variables.

    Notes
    -----
    This function uses @lru_cache to ensure only one Settings instance
    is created throughout the application lifecycle.
    """
    return Settings()
