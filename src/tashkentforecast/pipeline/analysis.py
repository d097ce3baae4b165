"""
Market Analysis

Runs one sequential ingest -> aggregate -> forecast pass over a sheet
snapshot. Every call builds fresh structures; nothing is cached between calls.
"""

from typing import Dict, Iterable, Optional, Sequence

from tashkentforecast.core.constants import DEFAULT_MARKET_ACTIVITY
from tashkentforecast.core.models import (
    CategoryForecast,
    CategoryStats,
    MarketAnalysis,
    RawRecord,
)
from tashkentforecast.exceptions import NoPriceColumnsError
from tashkentforecast.forecasting.fuzzy_tsk import FuzzyTSKModel
from tashkentforecast.logging_config import get_logger
from tashkentforecast.pipeline.aggregator import aggregate
from tashkentforecast.pipeline.ingestion import DEFAULT_COLUMNS, SheetColumns, ingest

logger = get_logger(__name__)


def forecast_categories(
    class_stats: Dict[str, CategoryStats],
    model: FuzzyTSKModel,
    market_activity: float = DEFAULT_MARKET_ACTIVITY,
) -> Dict[str, CategoryForecast]:
    """Forecast every housing class from its average price and trend."""
    forecasts = {}
    for category, stats in class_stats.items():
        forecasts[category] = CategoryForecast(
            category=category,
            current=stats.avg,
            count=stats.count,
            trend=stats.avg_trend,
            forecast=model.forecast(stats.avg, category, stats.avg_trend, market_activity),
        )
    return forecasts


def analyze(
    headers: Sequence[Optional[str]],
    rows: Iterable[RawRecord],
    model: Optional[FuzzyTSKModel] = None,
    market_activity: float = DEFAULT_MARKET_ACTIVITY,
    columns: SheetColumns = DEFAULT_COLUMNS,
) -> MarketAnalysis:
    """Build the full market analysis for one sheet snapshot.

    Args:
        headers: Header labels in sheet order.
        rows: Rows keyed by header label.
        model: Forecast model. A default model is used if omitted.
        market_activity: Market activity fed to the model, 0-1.
        columns: Column labels to read.

    Returns:
        MarketAnalysis with stats, history and per-class forecasts.

    Raises:
        NoPriceColumnsError: If the sheet has no price columns.
    """
    if model is None:
        model = FuzzyTSKModel()

    ingestion = ingest(headers, rows, columns)
    if not ingestion.price_columns:
        raise NoPriceColumnsError(headers)

    if not ingestion.entities:
        logger.warning("No usable rows in sheet")

    aggregation = aggregate(
        ingestion.category_groups,
        ingestion.region_groups,
        ingestion.price_columns,
    )
    forecasts = forecast_categories(aggregation.class_stats, model, market_activity)

    return MarketAnalysis(
        ingestion=ingestion,
        aggregation=aggregation,
        forecasts=forecasts,
    )
