"""
Housing Class and District Utilities

Maps free-text "Класс" and "Район" cells to the canonical vocabulary used
for grouping. Classes form a closed set: unrecognized labels are rejected.
Districts are open: unrecognized labels pass through as typed.
"""

from typing import Any, List, Optional

from tashkentforecast.core.constants import (
    CATEGORY_CONTAINMENT_ORDER,
    CATEGORY_KEYWORDS,
    REGION_KEYWORDS,
)
from tashkentforecast.logging_config import get_logger

logger = get_logger(__name__)


def normalize_category(raw: Any) -> Optional[str]:
    """Map a housing class label to its canonical name.

    Exact keyword matches win. Otherwise the label is searched for a keyword,
    premium before business before comfort, so compound labels such as
    "комфорт, бизнес" resolve to the higher class.

    Args:
        raw: Raw class cell value.

    Returns:
        "Комфорт", "Бизнес" or "Премиум", or None if the label is not a known class.

    Example:
        >>> normalize_category(" Бизнес ")
        "Бизнес"
        >>> normalize_category("премиум+")
        "Премиум"
        >>> normalize_category("элит")
        None
    """
    if not raw:
        return None

    label = str(raw).lower().strip()

    if label in CATEGORY_KEYWORDS:
        return CATEGORY_KEYWORDS[label]

    for keyword in CATEGORY_CONTAINMENT_ORDER:
        if keyword in label:
            return CATEGORY_KEYWORDS[keyword]

    logger.debug("Unrecognized housing class: %r", raw)
    return None


def normalize_region(raw: Any) -> Any:
    """Map a district label to its canonical name.

    Args:
        raw: Raw district cell value.

    Returns:
        Canonical district name, the untouched input if no district matches,
        or None for an empty cell.

    Example:
        >>> normalize_region("Мирзо Улугбек")
        "Мирзо-Улугбекский"
        >>> normalize_region("Сергели")
        "Сергели"
    """
    if not raw:
        return None

    label = str(raw).lower().strip()
    for keyword, region in REGION_KEYWORDS:
        if keyword in label:
            return region

    return raw


def get_categories() -> List[str]:
    """Get the canonical housing classes, cheapest first."""
    return list(CATEGORY_KEYWORDS.values())


def get_regions() -> List[str]:
    """Get the canonical district names in matching order."""
    return [region for _, region in REGION_KEYWORDS]
