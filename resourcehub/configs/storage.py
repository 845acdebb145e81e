"""
S3 storage bucket configuration.

Settings for resource files, thumbnails and avatars, plus presigned URL
generation and per-kind upload limits.

Dependencies: pydantic_settings
System role: Object storage configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Settings for S3 storage operations."""

    model_config = SettingsConfigDict(
        env_prefix="S3_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="resourcehub-dev-storage",
        description="S3 bucket holding resource files, thumbnails and avatars",
    )
    region: str = Field(
        default="us-east-1",
        description="AWS region for S3 bucket",
    )
    public_base_url: str | None = Field(
        default=None,
        description="CDN/base URL for public objects (thumbnails, avatars)",
    )
    presigned_url_expiry: int = Field(
        default=3600,
        description="Presigned URL expiry in seconds (default 1 hour)",
    )
    max_resource_size: int = Field(
        default=100 * 1024 * 1024,
        description="Maximum resource file size in bytes",
    )
    max_image_size: int = Field(
        default=5 * 1024 * 1024,
        description="Maximum thumbnail/avatar size in bytes",
    )
