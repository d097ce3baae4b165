"""
Data Models for the Tashkent Price Forecaster

Dataclass definitions for sheet tables, residential complexes, aggregates and forecasts.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

# One spreadsheet row keyed by column label
RawRecord = Dict[str, Any]


@dataclass(frozen=True)
class PriceColumn:
    """A price column discovered in the header row."""

    header: str
    period: str  # header without the price prefix, e.g. "сентябрь"
    index: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class PricePoint:
    """A valid price observed for a complex in one period."""

    column: str
    period: str
    price: float


@dataclass
class Entity:
    """A residential complex (ЖК) tracked across pricing periods."""

    name: str
    category: str
    region: Optional[str] = None
    developer: Optional[str] = None
    prices: List[PricePoint] = field(default_factory=list)

    @property
    def price_values(self) -> List[float]:
        return [p.price for p in self.prices]

    @property
    def price_labels(self) -> List[str]:
        return [p.period for p in self.prices]

    @property
    def first_price(self) -> float:
        return self.prices[0].price

    @property
    def last_price(self) -> float:
        return self.prices[-1].price

    @property
    def trend(self) -> float:
        """Fractional change between the first and last valid price."""
        if len(self.prices) < 2:
            return 0.0
        return (self.last_price - self.first_price) / self.first_price

    @property
    def trend_percent(self) -> float:
        return round(self.trend * 100, 1)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "category": self.category,
            "region": self.region,
            "developer": self.developer,
            "prices": self.price_values,
            "price_labels": self.price_labels,
            "first_price": self.first_price,
            "last_price": self.last_price,
            "trend": self.trend,
            "trend_percent": self.trend_percent,
        }


@dataclass
class CategoryStats:
    """Aggregate over the last observed prices of one housing class."""

    category: str
    count: int
    avg: int
    min: float
    max: float
    avg_trend: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class RegionStats:
    """Aggregate over the last observed prices of one district."""

    region: str
    count: int
    avg: int
    avg_trend: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class PriceHistoryPoint:
    """Mean price per class for one price column."""

    column: str
    period: str
    values: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class ForecastPoint:
    """Projected price at a forecast horizon."""

    months: int
    price: int
    change: float  # percent, one decimal

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class CategoryForecast:
    """Forecast table for one housing class."""

    category: str
    current: int
    count: int
    trend: float
    forecast: List[ForecastPoint] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "category": self.category,
            "current": self.current,
            "count": self.count,
            "trend": self.trend,
            "forecast": [point.to_dict() for point in self.forecast],
        }


@dataclass
class SheetTable:
    """Header labels and rows decoded from a spreadsheet payload."""

    headers: List[str]
    rows: List[RawRecord] = field(default_factory=list)


@dataclass
class IngestionResult:
    """Complexes built from one sheet snapshot, grouped by class and district."""

    price_columns: List[PriceColumn] = field(default_factory=list)
    entities: List[Entity] = field(default_factory=list)
    category_groups: Dict[str, List[Entity]] = field(default_factory=dict)
    region_groups: Dict[str, List[Entity]] = field(default_factory=dict)


@dataclass
class AggregationResult:
    """Summary statistics and price history."""

    class_stats: Dict[str, CategoryStats] = field(default_factory=dict)
    district_stats: Dict[str, RegionStats] = field(default_factory=dict)
    price_history: List[PriceHistoryPoint] = field(default_factory=list)


@dataclass
class MarketAnalysis:
    """Everything derived from one refresh."""

    ingestion: IngestionResult
    aggregation: AggregationResult
    forecasts: Dict[str, CategoryForecast] = field(default_factory=dict)
    generated_at: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def all_entities(self) -> List[Entity]:
        return self.ingestion.entities

    @property
    def class_stats(self) -> Dict[str, CategoryStats]:
        return self.aggregation.class_stats

    @property
    def district_stats(self) -> Dict[str, RegionStats]:
        return self.aggregation.district_stats

    @property
    def price_history(self) -> List[PriceHistoryPoint]:
        return self.aggregation.price_history

    @property
    def price_columns(self) -> List[PriceColumn]:
        return self.ingestion.price_columns

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "class_stats": {k: v.to_dict() for k, v in self.class_stats.items()},
            "district_stats": {k: v.to_dict() for k, v in self.district_stats.items()},
            "all_entities": [e.to_dict() for e in self.all_entities],
            "price_columns": [c.to_dict() for c in self.price_columns],
            "price_history": [p.to_dict() for p in self.price_history],
            "forecasts": {k: v.to_dict() for k, v in self.forecasts.items()},
            "generated_at": self.generated_at,
        }
