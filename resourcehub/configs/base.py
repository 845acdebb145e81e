"""
Shared settings for every ResourceHub config section.

Each section reads the project's .env file and its own environment
variables. The fields here decide how the API runs: environment name,
debug flag and root log level.

Dependencies: pydantic_settings
System role: Common parent of the marketplace, auth, storage and database settings
"""

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict
from pydantic import Field


class BaseSettings(PydanticBaseSettings):
    """Fields every ResourceHub settings section carries."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment name; development skips analytics persistence",
    )
    debug: bool = Field(
        default=False,
        description="FastAPI debug mode (tracebacks in 500 responses)",
    )
    log_level: str = Field(
        default="INFO",
        description="Root level passed to configure_logging()",
    )

    @property
    def is_development(self) -> bool:
        """Local runs: development, dev or local."""
        return self.environment.lower() in ("development", "dev", "local")
