"""
Authentication configuration settings.

JWT signing parameters and password hashing cost.

Dependencies: pydantic_settings
System role: Authentication configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """JWT and password hashing configuration."""

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    secret_key: str = Field(
        default="change-me-in-production",
        description="Secret used to sign access tokens",
    )
    algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        description="Access token lifetime in minutes",
    )
    password_hash_iterations: int = Field(
        default=390_000,
        description="PBKDF2-SHA256 iteration count",
    )
