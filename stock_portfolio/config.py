"""Application configuration using Pydantic Settings."""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

PRODUCT_NAME = "Stock Portfolio"
PRODUCT_VERSION = "1.0.0"
PRODUCT_DESCRIPTION = "Track stock holdings, portfolio value and live quotes."


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing at startup."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./stock_portfolio.db"

    # Market Data (Finnhub)
    finnhub_api_key: str = ""
    finnhub_base_url: str = "https://finnhub.io/api/v1"
    finnhub_timeout_seconds: float = 15

    # Inbound limit on the quote/search proxy routes
    proxy_rate_limit: str = "60/minute"

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def validate_settings(settings: Settings) -> Settings:
    """Fail fast if the market data API key is not configured.

    Args:
        settings: Settings to validate

    Returns:
        The same settings instance

    Raises:
        ConfigurationError: If FINNHUB_API_KEY is missing or blank
    """
    if not settings.finnhub_api_key or not settings.finnhub_api_key.strip():
        raise ConfigurationError(
            "Finnhub API key is not configured. "
            "Please set the FINNHUB_API_KEY environment variable or add it to .env."
        )
    logger.info("Environment validation successful - Finnhub API key is configured.")
    return settings


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the entry points."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Reduce noise from third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
