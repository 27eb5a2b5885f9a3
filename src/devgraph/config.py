"""
Configuration management for the devgraph backend
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from .errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database (DEVGRAPH_DATABASE_URL or plain DATABASE_URL)
    database_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DEVGRAPH_DATABASE_URL", "DATABASE_URL"),
    )
    database_pool_size: int = 10
    database_max_overflow: int = 20

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False
    cors_origins: list[str] = []

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = False
    sql_echo: bool = False
    log_level: str = "INFO"

    @property
    def console_logs(self) -> bool:
        """Human-readable logs in debug mode, never in production."""
        return self.debug and self.environment.lower() != "production"

    class Config:
        env_file = ".env"
        env_prefix = "DEVGRAPH_"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"


# Global settings instance
settings = Settings()


def require_database_url(database_url: str | None = None) -> str:
    """Return the configured database URL or fail.

    The service cannot start without a datastore, so a missing URL is fatal.
    """
    url = database_url or settings.database_url
    if not url:
        raise ConfigurationError(
            "database URL is required (set DEVGRAPH_DATABASE_URL or DATABASE_URL)"
        )
    return url


def to_async_url(database_url: str) -> str:
    """Rewrite a PostgreSQL URL so it uses the asyncpg driver."""
    for prefix in ("postgresql://", "postgres://"):
        if database_url.startswith(prefix):
            return "postgresql+asyncpg://" + database_url[len(prefix) :]
    return database_url
