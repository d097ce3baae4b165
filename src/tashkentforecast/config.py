"""
Centralized Configuration Module

Provides configuration classes and environment variable loading for all components.

Usage:
    from tashkentforecast.config import get_config

    config = get_config()
    sheet_url = config.sheet.url
    api_port = config.api.port
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from tashkentforecast.core.constants import (
    DEFAULT_MARKET_ACTIVITY,
    GOOGLE_SHEETS_ID,
    SHEET_NAME,
)
from tashkentforecast.exceptions import ConfigurationError

# Load .env file if present
load_dotenv()


@dataclass
class SheetConfig:
    """Google Sheets data source configuration."""

    sheet_id: str = field(default_factory=lambda: os.getenv(
        "TASHKENTFORECAST_SHEET_ID", GOOGLE_SHEETS_ID
    ))
    sheet_name: str = field(default_factory=lambda: os.getenv(
        "TASHKENTFORECAST_SHEET_NAME", SHEET_NAME
    ))
    timeout: float = field(default_factory=lambda: float(os.getenv(
        "TASHKENTFORECAST_FETCH_TIMEOUT", "30"
    )))
    max_retries: int = field(default_factory=lambda: int(os.getenv(
        "TASHKENTFORECAST_FETCH_RETRIES", "0"
    )))
    backoff_base: float = field(default_factory=lambda: float(os.getenv(
        "TASHKENTFORECAST_FETCH_BACKOFF", "2"
    )))

    def __post_init__(self):
        # A hung fetch must not block a refresh forever
        if self.timeout <= 0:
            self.timeout = 30.0
        if self.max_retries < 0:
            self.max_retries = 0

    @property
    def url(self) -> str:
        """Visualization API endpoint for the configured sheet."""
        from tashkentforecast.source.sheets import build_sheet_url

        return build_sheet_url(self.sheet_id, self.sheet_name)


@dataclass
class ForecastConfig:
    """Forecast model configuration."""

    market_activity: float = field(default_factory=lambda: float(os.getenv(
        "TASHKENTFORECAST_MARKET_ACTIVITY", str(DEFAULT_MARKET_ACTIVITY)
    )))

    def __post_init__(self):
        # Activity is expressed on a 0-1 scale
        if not 0.0 <= self.market_activity <= 1.0:
            self.market_activity = DEFAULT_MARKET_ACTIVITY


@dataclass
class APIConfig:
    """API server configuration."""

    host: str = field(default_factory=lambda: os.getenv(
        "TASHKENTFORECAST_API_HOST", "127.0.0.1"
    ))
    port: int = field(default_factory=lambda: int(os.getenv(
        "TASHKENTFORECAST_API_PORT", "5000"
    )))
    debug: bool = field(default_factory=lambda: os.getenv(
        "TASHKENTFORECAST_DEBUG", "false"
    ).lower() in ("true", "1", "yes"))


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv(
        "TASHKENTFORECAST_LOG_LEVEL", "INFO"
    ).upper())
    log_file: Optional[str] = field(default_factory=lambda: os.getenv(
        "TASHKENTFORECAST_LOG_FILE"
    ))

    def __post_init__(self):
        # Validate log level
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.level not in valid_levels:
            self.level = "INFO"


@dataclass
class Config:
    """Main configuration container."""

    sheet: SheetConfig = field(default_factory=SheetConfig)
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    api: APIConfig = field(default_factory=APIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Singleton instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        Config: The application configuration.

    Raises:
        ConfigurationError: If a numeric environment variable is malformed.
    """
    global _config
    if _config is None:
        try:
            _config = Config()
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment setting: {e}") from e
    return _config


def reset_config() -> None:
    """Reset the configuration (useful for testing)."""
    global _config
    _config = None
