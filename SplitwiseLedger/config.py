"""
Config Module

Runtime settings for the split ledger, read from environment variables
(prefix SPLITWISE_) or an optional .env file.

Functions:
    get_settings: Return the cached Settings instance.
    configure_logging: Apply the configured log level to the root logger.
"""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Ledger metadata
    APP_NAME: str = "Splitwise Calculator Database"
    SCHEMA_VERSION: str = "1.0"

    # Display
    DISPLAY_TIMEZONE: str = "Asia/Kolkata"
    CURRENCY_SYMBOL: str = "₹"

    # Actor recorded when a settlement is completed without a name
    DEFAULT_COMPLETED_BY: str = "User"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_prefix="SPLITWISE_",
        env_file=".env",
        extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings = None) -> None:
    """Configure root logging from settings (defaults to get_settings())."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s"
    )
