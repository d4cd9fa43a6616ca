"""Configuration management for fixture loading."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Fixture settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ORMFIXTURE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite+pysqlite:///:memory:",
        description="SQLAlchemy URL of the database fixtures are loaded into",
    )
    echo_sql: bool = Field(default=False, description="Echo emitted SQL")

    # Data files
    fixtures_dir: str = Field(
        default="tests/fixtures/data",
        description="Directory relative data_file paths are resolved against",
    )

    log_level: str = Field(default="INFO", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
