"""
Data pipeline: sheet rows to class and district statistics.
"""

from tashkentforecast.pipeline.ingestion import (
    SheetColumns,
    build_entity,
    find_price_columns,
    ingest,
)
from tashkentforecast.pipeline.aggregator import aggregate
from tashkentforecast.pipeline.analysis import analyze, forecast_categories

__all__ = [
    "SheetColumns",
    "build_entity",
    "find_price_columns",
    "ingest",
    "aggregate",
    "analyze",
    "forecast_categories",
]
