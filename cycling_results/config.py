"""Configuration management for the cycling results layer."""

from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlparse, urlunparse

from decouple import Choices
from decouple import config


class Environment(Enum):
    """Supported deployment environments."""

    DEVELOPMENT = "development"
    CI = "CI"
    PRODUCTION = "production"


@dataclass
class Config:
    """Configuration for the cycling results layer."""

    # Required fields
    database_url: str
    database_name: str = "cycling_results"

    # Environment configuration
    environment: Environment = Environment.DEVELOPMENT

    # Database engine configuration
    database_echo: bool = False
    database_pool_pre_ping: bool = True

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(
            config("ENVIRONMENT", default="development", cast=Choices(["development", "CI", "production"]))
        )

        return cls(
            # Required
            database_url=config("DATABASE_URL"),
            database_name=config("DATABASE_NAME", default="cycling_results"),
            # Environment
            environment=env,
            # Database engine
            database_echo=config("DATABASE_ECHO", default=False, cast=bool),
            database_pool_pre_ping=config("DATABASE_POOL_PRE_PING", default=True, cast=bool),
            # Logging
            log_level=config(
                "LOG_LEVEL", default="INFO", cast=Choices(["DEBUG", "INFO", "WARNING", "ERROR"])
            ),
            log_format=config("LOG_FORMAT", default="json", cast=Choices(["json", "text"])),
        )

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == Environment.CI

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    def get_database_url(self) -> str:
        """Construct the full database URL for the async engine.

        Postgres URLs get the asyncpg driver and the configured database
        name. Any other URL (e.g. ``sqlite+aiosqlite://``) is used as given.
        """
        parsed = urlparse(self.database_url)

        scheme = parsed.scheme
        if scheme in ("postgres", "postgresql"):
            scheme = "postgresql+asyncpg"
        elif scheme != "postgresql+asyncpg":
            return self.database_url

        path = f"/{self.database_name}"

        return urlunparse(
            (scheme, parsed.netloc, path, parsed.params, parsed.query, parsed.fragment)
        )
