"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from resourcehub.configs.base import BaseSettings
from resourcehub.configs.auth import AuthSettings
from resourcehub.configs.database import DatabaseSettings
from resourcehub.configs.marketplace import MarketplaceSettings
from resourcehub.configs.storage import StorageSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = DatabaseSettings()
    storage: StorageSettings = StorageSettings()
    auth: AuthSettings = AuthSettings()
    marketplace: MarketplaceSettings = MarketplaceSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from resourcehub.configs import get_settings
        settings = get_settings()
    """
    return Settings()
