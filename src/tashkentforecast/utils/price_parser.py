"""
Price Parsing Utilities

Turns spreadsheet cell values into prices and formats prices for display.
Cells may hold numbers, currency strings ("$1,250", "1 250 у.е."),
blanks, or the "-" placeholder.
"""

import math
import re
from typing import Any, Optional, Union

from tashkentforecast.logging_config import get_logger

logger = get_logger(__name__)

# Placeholders meaning "no price for this period"
EMPTY_MARKERS = ("", "-")

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")


def parse_price(value: Any) -> Optional[float]:
    """Parse a cell value into a price.

    Numbers pass through unchanged. Strings keep only digits and decimal
    points and the leading decimal number is read.

    Args:
        value: Raw cell value.

    Returns:
        Numeric price, or None if the cell holds no number.

    Example:
        >>> parse_price("$1,250")
        1250.0
        >>> parse_price("-")
        None
        >>> parse_price(980)
        980
    """
    if value is None:
        return None

    # bool is an int subclass, but a checkbox cell is not a price
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return value

    text = str(value)
    if text in EMPTY_MARKERS:
        return None

    stripped = _NON_NUMERIC.sub("", text)
    match = _LEADING_NUMBER.match(stripped)
    if not match:
        logger.debug("Could not extract price from: %r", text)
        return None

    return float(match.group(0))


def is_valid_price(price: Optional[float]) -> bool:
    """Check that a parsed price is present, finite and strictly positive.

    Digit runs too long for a float parse to infinity and are rejected.
    """
    return price is not None and math.isfinite(price) and price > 0


def round_half_up(value: Union[int, float]) -> int:
    """Round to the nearest integer, halves toward +infinity.

    Example:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
    """
    return int(math.floor(value + 0.5))


def format_price(price: Union[int, float, None], compact: bool = False) -> str:
    """Format a price value as a string.

    Args:
        price: Price value to format.
        compact: If True, use compact notation ($1.5K instead of $1,500).

    Returns:
        Formatted price string.

    Example:
        >>> format_price(1250)
        "$1,250"
        >>> format_price(1250, compact=True)
        "$1.2K"
    """
    if price is None:
        return "-"

    price = round_half_up(price)

    if compact:
        if price >= 1_000_000:
            value = price / 1_000_000
            if value == int(value):
                return f"${int(value)}M"
            return f"${value:.1f}M"
        elif price >= 1_000:
            value = price / 1_000
            if value == int(value):
                return f"${int(value)}K"
            return f"${value:.1f}K"

    return f"${price:,}"


def format_change(change: Optional[float]) -> str:
    """Format a percentage change with an explicit sign.

    Example:
        >>> format_change(7.3)
        "+7.3%"
    """
    if change is None:
        return "-"
    sign = "+" if change >= 0 else ""
    return f"{sign}{change:.1f}%"
