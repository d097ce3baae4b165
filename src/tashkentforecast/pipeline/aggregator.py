"""
Class and District Aggregation

Reduces grouped complexes to summary statistics and builds the per-class
mean price series over the price columns.
"""

from typing import Dict, List, Sequence

import pandas as pd

from tashkentforecast.core.models import (
    AggregationResult,
    CategoryStats,
    Entity,
    PriceColumn,
    PriceHistoryPoint,
    RegionStats,
)
from tashkentforecast.logging_config import get_logger
from tashkentforecast.utils.price_parser import round_half_up

logger = get_logger(__name__)

GROUP_COLUMNS = ["group", "last_price", "trend"]
OBSERVATION_COLUMNS = ["column", "category", "price"]


def _group_frame(groups: Dict[str, List[Entity]]) -> pd.DataFrame:
    """One row per complex with its group key, last price and trend."""
    records = [
        {"group": key, "last_price": entity.last_price, "trend": entity.trend}
        for key, entities in groups.items()
        for entity in entities
    ]
    return pd.DataFrame.from_records(records, columns=GROUP_COLUMNS)


def _summarize(groups: Dict[str, List[Entity]]) -> pd.DataFrame:
    """Count, mean, min, max of last prices and mean trend per group.

    Groups keep their first-appearance order.
    """
    frame = _group_frame(groups)
    return frame.groupby("group", sort=False).agg(
        count=("last_price", "size"),
        mean=("last_price", "mean"),
        min=("last_price", "min"),
        max=("last_price", "max"),
        avg_trend=("trend", "mean"),
    )


def compute_category_stats(category_groups: Dict[str, List[Entity]]) -> Dict[str, CategoryStats]:
    """Summarize each housing class over its complexes' last prices."""
    if not category_groups:
        return {}

    stats = {}
    for category, row in _summarize(category_groups).iterrows():
        stats[category] = CategoryStats(
            category=category,
            count=int(row["count"]),
            avg=round_half_up(row["mean"]),
            min=float(row["min"]),
            max=float(row["max"]),
            avg_trend=float(row["avg_trend"]),
        )
        logger.debug(
            "%s: %d complexes, avg %d, min %.0f, max %.0f",
            category, stats[category].count, stats[category].avg,
            stats[category].min, stats[category].max,
        )
    return stats


def compute_region_stats(region_groups: Dict[str, List[Entity]]) -> Dict[str, RegionStats]:
    """Summarize each district over its complexes' last prices."""
    if not region_groups:
        return {}

    return {
        region: RegionStats(
            region=region,
            count=int(row["count"]),
            avg=round_half_up(row["mean"]),
            avg_trend=float(row["avg_trend"]),
        )
        for region, row in _summarize(region_groups).iterrows()
    }


def build_price_history(
    category_groups: Dict[str, List[Entity]],
    price_columns: Sequence[PriceColumn],
) -> List[PriceHistoryPoint]:
    """Mean price per class for every price column.

    Only complexes with a valid price in a column contribute to it; a class
    with no observation in a column is left out of that point.
    """
    records = [
        {"column": point.column, "category": category, "price": point.price}
        for category, entities in category_groups.items()
        for entity in entities
        for point in entity.prices
    ]
    observations = pd.DataFrame.from_records(records, columns=OBSERVATION_COLUMNS)
    means = {}
    if not observations.empty:
        means = observations.groupby(["column", "category"], sort=False)["price"].mean().to_dict()

    history = []
    for column in price_columns:
        point = PriceHistoryPoint(column=column.header, period=column.period)
        for category in category_groups:
            mean = means.get((column.header, category))
            if mean is not None:
                point.values[category] = round_half_up(mean)
        history.append(point)
    return history


def aggregate(
    category_groups: Dict[str, List[Entity]],
    region_groups: Dict[str, List[Entity]],
    price_columns: Sequence[PriceColumn],
) -> AggregationResult:
    """Compute class stats, district stats and price history.

    Args:
        category_groups: Complexes keyed by housing class.
        region_groups: Complexes keyed by district.
        price_columns: Price columns in chronological order.

    Returns:
        AggregationResult built from scratch.
    """
    result = AggregationResult(
        class_stats=compute_category_stats(category_groups),
        district_stats=compute_region_stats(region_groups),
        price_history=build_price_history(category_groups, price_columns),
    )
    logger.info(
        "Aggregated %d classes, %d districts, %d history points",
        len(result.class_stats),
        len(result.district_stats),
        len(result.price_history),
    )
    return result
