"""
PostgreSQL settings for the pgvector store.

Only read when VECTOR_STORE_STORE_TYPE=pgvector.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for the vector table
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from askdocs.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Connection and pool parameters, env prefix POSTGRES_."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = "postgres"
    db: str = Field(default="askdocs", description="Database holding the chunks table")

    pool_size: int = Field(default=5, ge=1)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    echo_sql: bool = False

    sslmode: str = Field(default="disable", description="'require' to force TLS")

    @property
    def async_database_url(self) -> str:
        """asyncpg connection URL; asyncpg takes 'ssl' rather than 'sslmode'."""
        url = f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.db}"
        if self.sslmode == "require":
            url += "?ssl=require"
        return url
