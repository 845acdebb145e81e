"""
PostgreSQL settings for the marketplace store.

Read from POSTGRES_* variables. Builds the psycopg2 URL used by table
creation and the asyncpg URL used by request sessions.

Dependencies: pydantic, pydantic_settings
System role: Connection parameters for boundary.db.connection
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from resourcehub.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Where users, resources, purchases and reviews are stored."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="postgres", description="PostgreSQL password")
    db: str = Field(default="resourcehub", description="Marketplace database name")

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Log every SQL statement (SQLAlchemy echo)")

    sslmode: str = Field(default="prefer", description="SSL mode for database connections")

    @property
    def database_url(self) -> str:
        """
        Sync URL for the psycopg2 engine.

        Returns:
            str: postgresql:// URL carrying sslmode
        """
        return (
            f"postgresql://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}?sslmode={self.sslmode}"
        )

    @property
    def async_database_url(self) -> str:
        """
        Async URL for the asyncpg engine.

        asyncpg has no sslmode parameter; only "require" is forwarded, as ssl=require.

        Returns:
            str: postgresql+asyncpg:// URL
        """
        ssl_param = "?ssl=require" if self.sslmode == "require" else ""
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}{ssl_param}"
        )
