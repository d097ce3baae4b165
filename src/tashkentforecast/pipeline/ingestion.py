"""
Sheet Ingestion

Builds residential complex records from raw sheet rows and groups them by
housing class and district.

Price columns are not hard-coded: every header starting with "Цена "
(case-insensitive) is a pricing period, and header order is chronological
order. A new month only needs a new column in the sheet.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from tashkentforecast.core.constants import (
    COLUMN_CATEGORY,
    COLUMN_DEVELOPER,
    COLUMN_NAME,
    COLUMN_REGION,
    PRICE_COLUMN_PREFIX,
)
from tashkentforecast.core.models import (
    Entity,
    IngestionResult,
    PriceColumn,
    PricePoint,
    RawRecord,
)
from tashkentforecast.logging_config import get_logger
from tashkentforecast.utils.normalizers import normalize_category, normalize_region
from tashkentforecast.utils.price_parser import is_valid_price, parse_price

logger = get_logger(__name__)


@dataclass(frozen=True)
class SheetColumns:
    """Column labels the pipeline reads from each row."""

    name: str = COLUMN_NAME
    category: str = COLUMN_CATEGORY
    region: str = COLUMN_REGION
    developer: str = COLUMN_DEVELOPER
    price_prefix: str = PRICE_COLUMN_PREFIX


DEFAULT_COLUMNS = SheetColumns()


def find_price_columns(
    headers: Iterable[Optional[str]],
    prefix: str = PRICE_COLUMN_PREFIX,
) -> List[PriceColumn]:
    """Discover price columns in header order.

    Args:
        headers: Header labels from the sheet.
        prefix: Lower-cased label prefix marking a price column.

    Returns:
        Ordered price column descriptors.

    Example:
        >>> [c.period for c in find_price_columns(["Наименование ЖК", "Цена сентябрь", "Цена октябрь"])]
        ["сентябрь", "октябрь"]
    """
    prefix = prefix.lower()
    columns = []
    for index, header in enumerate(headers):
        if not header or not str(header).lower().startswith(prefix):
            continue
        header = str(header)
        columns.append(PriceColumn(
            header=header,
            period=header[len(prefix):].strip(),
            index=index,
        ))
    return columns


def build_entity(
    row: RawRecord,
    price_columns: Sequence[PriceColumn],
    columns: SheetColumns = DEFAULT_COLUMNS,
) -> Optional[Entity]:
    """Build a complex record from one row.

    Returns:
        The entity, or None when the row has no name, an unrecognized
        housing class, or no valid positive price.
    """
    name = row.get(columns.name)
    if not name:
        return None

    category = normalize_category(row.get(columns.category))
    if category is None:
        logger.debug("Skipping %r: unrecognized class %r", name, row.get(columns.category))
        return None

    prices = []
    for column in price_columns:
        price = parse_price(row.get(column.header))
        if is_valid_price(price):
            prices.append(PricePoint(column=column.header, period=column.period, price=price))

    if not prices:
        logger.debug("Skipping %r: no valid prices", name)
        return None

    return Entity(
        name=str(name),
        category=category,
        region=normalize_region(row.get(columns.region)),
        developer=row.get(columns.developer) or None,
        prices=prices,
    )


def ingest(
    headers: Sequence[Optional[str]],
    rows: Iterable[RawRecord],
    columns: SheetColumns = DEFAULT_COLUMNS,
) -> IngestionResult:
    """Turn sheet rows into complexes grouped by class and district.

    Args:
        headers: Header labels, in sheet order.
        rows: Rows keyed by header label. Rows are only read.
        columns: Column labels to read.

    Returns:
        IngestionResult. Empty when the sheet has no price columns.
    """
    price_columns = find_price_columns(headers, columns.price_prefix)
    if not price_columns:
        logger.warning("No price columns found in headers: %s", list(headers))
        return IngestionResult()

    logger.debug("Price columns: %s", [c.header for c in price_columns])

    result = IngestionResult(price_columns=price_columns)
    skipped = 0

    for row in rows:
        entity = build_entity(row, price_columns, columns)
        if entity is None:
            skipped += 1
            continue

        result.entities.append(entity)
        result.category_groups.setdefault(entity.category, []).append(entity)
        if entity.region:
            result.region_groups.setdefault(entity.region, []).append(entity)

    logger.info(
        "Ingested %d complexes (%d rows skipped) across %d price columns",
        len(result.entities),
        skipped,
        len(price_columns),
    )
    return result
