"""Application configuration.

Loads settings from environment variables with sensible defaults.
Variables are prefixed with ``STOREFRONT_`` (e.g. ``STOREFRONT_LOG_LEVEL``).
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Cart rules
    max_quantity_per_line: int = Field(default=99, ge=1)
    currency: str = "PHP"

    # Catalog sorting (LC_COLLATE for name and category order)
    collation_locale: str | None = None

    # Sessions
    default_session_id: str = "default"

    # Inventory backend (stock annotations only)
    inventory_url: str = "http://inventory:8080"
    stock_timeout_seconds: float = 5.0

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
