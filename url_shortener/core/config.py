"""Application configuration settings."""

from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Database
    connection_string: str = "."
    database_name: str = "url_shortener"
    url_collection_name: str = "url_maps"

    # Application
    app_title: str = "URL Shortener Service"
    app_version: str = "0.1.0"
    app_description: str = "Shortens long urls and redirects short urls to them"
    log_level: str = "INFO"

    # URL Shortener
    short_url_length: int = 7
    max_generation_attempts: int = 3

    @property
    def db_path(self) -> str:
        """Get the SQLite database location.

        ":memory:" is passed through untouched, anything else is treated as
        the directory holding ``<database_name>.db``.
        """
        if self.connection_string == ":memory:":
            return self.connection_string
        return str(Path(self.connection_string) / f"{self.database_name}.db")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
