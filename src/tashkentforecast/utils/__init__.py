"""
Utility modules for the Tashkent Price Forecaster.

Provides cell value parsing and label normalization.
"""

from tashkentforecast.utils.price_parser import (
    parse_price,
    is_valid_price,
    round_half_up,
    format_price,
    format_change,
)
from tashkentforecast.utils.normalizers import (
    normalize_category,
    normalize_region,
    get_categories,
    get_regions,
)

__all__ = [
    "parse_price",
    "is_valid_price",
    "round_half_up",
    "format_price",
    "format_change",
    "normalize_category",
    "normalize_region",
    "get_categories",
    "get_regions",
]
