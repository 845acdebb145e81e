"""
Marketplace behaviour settings.

Dependencies: pydantic_settings
System role: Listing and analytics configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MarketplaceSettings(BaseSettings):
    """Listing defaults and analytics switches."""

    model_config = SettingsConfigDict(
        env_prefix="MARKETPLACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    page_size: int = Field(default=12, description="Default listing page size")
    max_page_size: int = Field(default=100, description="Upper bound for requested page sizes")
    enable_dev_analytics: bool = Field(
        default=False,
        description="Persist analytics events while running in development",
    )
