"""
Database connection settings.

Production runs on PostgreSQL through asyncpg; POSTGRES_URL_OVERRIDE points
the service at any other async SQLAlchemy URL (local runs use
sqlite+aiosqlite).

Dependencies: pydantic, pydantic_settings, sqlalchemy
System role: Engine URL and pool parameters
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class DatabaseSettings(BaseSettings):
    """Connection and pool parameters for the course database."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost")
    port: int = Field(default=5432)
    user: str = Field(default="postgres")
    password: str = Field(default="postgres")
    db: str = Field(default="dsaplatform", description="Database holding chapters, lessons and interactions")
    require_ssl: bool = Field(default=False, description="Ask asyncpg for a TLS connection")

    pool_size: int = Field(default=10, gt=0)
    max_overflow: int = Field(default=20, ge=0)
    pool_timeout: int = Field(default=30, gt=0, description="Seconds to wait for a pooled connection")
    echo_sql: bool = Field(default=False, description="Log every SQL statement")

    url_override: str | None = Field(
        default=None,
        description="Full async SQLAlchemy URL replacing the PostgreSQL one",
    )

    @property
    def uses_override(self) -> bool:
        """True when the engine should skip PostgreSQL pool tuning."""
        return bool(self.url_override)

    @property
    def async_database_url(self) -> str:
        """Async SQLAlchemy URL; credentials are escaped."""
        if self.url_override:
            return self.url_override
        url = URL.create(
            "postgresql+asyncpg",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.db,
            query={"ssl": "require"} if self.require_ssl else {},
        )
        return url.render_as_string(hide_password=False)
