"""
Custom Exceptions for the Tashkent Price Forecaster

Provides a hierarchy of exceptions for standardized error handling across all modules.

Exception Hierarchy:
    TashkentForecastError (base)
    ├── ConfigurationError
    ├── DataSourceError
    │   ├── FetchError
    │   └── PayloadParseError
    ├── IngestionError
    │   └── NoPriceColumnsError
    └── ValidationError
"""

from typing import List, Optional


class TashkentForecastError(Exception):
    """Base exception for all forecaster errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


# Configuration Errors
class ConfigurationError(TashkentForecastError):
    """Raised when there's a configuration problem."""

    pass


# Data Source Errors
class DataSourceError(TashkentForecastError):
    """Base exception for spreadsheet source errors."""

    pass


class FetchError(DataSourceError):
    """Raised when the spreadsheet request fails or returns a non-success status."""

    def __init__(self, message: str, url: str = None, status_code: int = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class PayloadParseError(DataSourceError):
    """Raised when the spreadsheet payload cannot be decoded into a table."""

    def __init__(self, message: str, source: str = None):
        self.source = source
        super().__init__(message)


# Ingestion Errors
class IngestionError(TashkentForecastError):
    """Base exception for unusable datasets."""

    pass


class NoPriceColumnsError(IngestionError):
    """Raised when no header follows the price column naming convention."""

    def __init__(self, headers: Optional[List[str]] = None):
        self.headers = list(headers or [])
        super().__init__(
            f"No price columns found among {len(self.headers)} headers"
        )


# Validation Errors
class ValidationError(TashkentForecastError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = None, value=None):
        self.field = field
        self.value = value
        super().__init__(message)
