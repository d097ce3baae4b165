"""
Core modules for the Tashkent Price Forecaster.

Contains data models and shared constants.
"""

from tashkentforecast.core.constants import (
    COLUMN_NAME,
    COLUMN_CATEGORY,
    COLUMN_REGION,
    FORECAST_HORIZONS,
)
from tashkentforecast.core.models import (
    CategoryForecast,
    CategoryStats,
    Entity,
    ForecastPoint,
    MarketAnalysis,
    PriceColumn,
    PriceHistoryPoint,
    RegionStats,
    SheetTable,
)

__all__ = [
    "COLUMN_NAME",
    "COLUMN_CATEGORY",
    "COLUMN_REGION",
    "FORECAST_HORIZONS",
    "CategoryForecast",
    "CategoryStats",
    "Entity",
    "ForecastPoint",
    "MarketAnalysis",
    "PriceColumn",
    "PriceHistoryPoint",
    "RegionStats",
    "SheetTable",
]
