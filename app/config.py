from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Channel Inventory Sync"
    ENVIRONMENT: str = "local"

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./inventory.db"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Channel HTTP
    # ==============================
    CHANNEL_REQUEST_TIMEOUT_SECONDS: float = 15.0
    CHANNEL_MAX_RETRIES: int = 2
    CHANNEL_RETRY_BACKOFF_SECONDS: float = 0.5
    SHOPIFY_API_VERSION: str = "2024-01"
    AMAZON_API_URL: str = "https://sellingpartnerapi-na.amazon.com"
    AMAZON_MARKETPLACE_ID: Optional[str] = None
    EBAY_API_URL: str = "https://api.ebay.com"

    # ==============================
    # Sync
    # ==============================
    SYNC_STALE_SECONDS: int = 900

    # ==============================
    # Catalog defaults
    # ==============================
    DEFAULT_REORDER_POINT: int = 10
    DEFAULT_REORDER_QUANTITY: int = 50
    MOVEMENT_CREATED_BY: str = "system"

    # ==============================
    # Listing / Dashboard
    # ==============================
    MOVEMENT_LIST_LIMIT: int = 100
    DASHBOARD_RECENT_MOVEMENTS: int = 10
    DASHBOARD_TOP_PRODUCTS: int = 5


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
