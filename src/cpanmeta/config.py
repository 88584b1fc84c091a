"""Centralized configuration for cpanmeta using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed configuration loaded from ``CPANMETA_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CPANMETA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Search backend
    es_url: str = Field(default="http://127.0.0.1:9200", min_length=1, description="Base URL of the search backend")
    index_name: str = Field(default="cpan", min_length=1, description="Index holding the CPAN collections")
    author_collection: str = Field(default="author", min_length=1, description="Collection of author documents")
    favorite_collection: str = Field(default="favorite", min_length=1, description="Collection of favorite documents")
    http_timeout: int = Field(default=30, ge=1, description="HTTP request timeout in seconds")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    def search_url(self, collection: str) -> str:
        """URL of the ``_search`` endpoint for one collection."""
        return f"{self.es_url.rstrip('/')}/{self.index_name}/{collection}/_search"


def get_settings() -> Settings:
    """Load settings from the current environment."""
    return Settings()
