"""
Configuration management using Pydantic settings.
Handles the database URL, connection pool tuning, result limits and logging.
"""

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings
from typing import Optional
from functools import lru_cache
import logging


class Settings(BaseSettings):
    """Data-access settings with environment variable support."""

    # Application configuration
    app_name: str = "LightBnB"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database configuration; built from the components below when unset
    database_url: Optional[str] = None

    postgres_db: str = "lightbnb"
    postgres_user: str = "vagrant"
    postgres_password: str = "123"
    postgres_host: str = "localhost"
    postgres_port: int = 5432

    # Connection pool settings
    pool_size: int = 10
    max_overflow: int = 20
    pool_recycle: int = 3600
    pool_timeout: int = 30

    # Result limits for list queries
    default_result_limit: int = 10
    max_result_limit: int = 100

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Normalize and validate the logging level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def build_database_url(self):
        """Build database URL from components if not provided directly."""
        if not self.database_url:
            self.database_url = (
                f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
                f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
            )
        elif self.database_url.startswith("postgresql://"):
            # Ensure async driver is used
            self.database_url = self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "LIGHTBNB_",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings per process.
    """
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else getattr(logging, settings.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
