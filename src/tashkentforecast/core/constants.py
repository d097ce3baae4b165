"""
Shared Constants for the Tashkent Price Forecaster

Contains all constant values used across the application.
"""

from typing import Dict, List, Tuple

# Google Sheets source with current residential complex prices
GOOGLE_SHEETS_ID: str = "1oJtLLMd13oPqNGS2htIS7kS-CVGvr1vIQJXEXBVqd-4"
SHEET_NAME: str = "Цены (Актуальные)"
GVIZ_URL_TEMPLATE: str = (
    "https://docs.google.com/spreadsheets/d/{sheet_id}/gviz/tq"
    "?tqx=out:json&sheet={sheet_name}"
)

# Exact column labels in the source sheet
COLUMN_NAME: str = "Наименование ЖК"
COLUMN_DEVELOPER: str = "Застройщик"
COLUMN_REGION: str = "Район"
COLUMN_CATEGORY: str = "Класс"

# Price columns are discovered by this lower-cased header prefix ("Цена сентябрь")
PRICE_COLUMN_PREFIX: str = "цена "

# Housing classes
CATEGORY_COMFORT: str = "Комфорт"
CATEGORY_BUSINESS: str = "Бизнес"
CATEGORY_PREMIUM: str = "Премиум"

CATEGORY_KEYWORDS: Dict[str, str] = {
    "комфорт": CATEGORY_COMFORT,
    "бизнес": CATEGORY_BUSINESS,
    "премиум": CATEGORY_PREMIUM,
}

# Substring pass order: a label mentioning several classes resolves to the higher one
CATEGORY_CONTAINMENT_ORDER: List[str] = ["премиум", "бизнес", "комфорт"]

# Districts, checked in this order
REGION_KEYWORDS: List[Tuple[str, str]] = [
    ("мирзо", "Мирзо-Улугбекский"),
    ("мирабад", "Мирабадский"),
    ("яшнабад", "Яшнабадский"),
    ("алмазар", "Алмазарский"),
    ("яккасар", "Яккасарийский"),
]

# Forecast model
FORECAST_HORIZONS: Tuple[int, ...] = (6, 12, 18, 24)
DEFAULT_MARKET_ACTIVITY: float = 0.5
FIRING_THRESHOLD: float = 0.01
FALLBACK_CHANGE: float = 0.05
TREND_WEIGHT: float = 0.3

# Class multipliers, matched by substring in this order
CATEGORY_COEFFICIENTS: List[Tuple[str, float]] = [
    ("премиум", 1.25),
    ("бизнес", 1.15),
]
DEFAULT_CATEGORY_COEFFICIENT: float = 1.0
