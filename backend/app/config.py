"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.app.models.search import SortKey, SortOrder


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DOCSHELF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Service identity
    app_name: str = "Docshelf Tagging API"
    app_version: str = "0.1.0"

    # Logging
    log_level: str = "INFO"

    # Search defaults
    default_sort_key: SortKey = SortKey.relevance
    default_sort_order: SortOrder = SortOrder.desc
    max_search_results: int = 500

    # Persistence gate
    enforce_required_tags: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
