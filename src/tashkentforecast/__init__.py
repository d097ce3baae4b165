"""
Tashkent Housing Price Forecaster

Tracks residential complex (ЖК) prices published in a Google Sheet,
aggregates them by housing class and district, and forecasts class
prices 6 to 24 months ahead with a fuzzy TSK model.

Main components:
- source: Google Sheets fetch and payload decoding
- pipeline: ingestion, aggregation and analysis
- forecasting: fuzzy TSK forecast model
- api: Flask REST API server
- cli: Command-line interfaces

Usage:
    from tashkentforecast import config
    from tashkentforecast.pipeline import analyze
    from tashkentforecast.forecasting import FuzzyTSKModel
"""

__version__ = "1.0.0"

from tashkentforecast.config import get_config
from tashkentforecast.logging_config import setup_logging

__all__ = [
    "__version__",
    "get_config",
    "setup_logging",
]
