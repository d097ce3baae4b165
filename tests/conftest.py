"""
Pytest Configuration and Fixtures

Provides shared fixtures for all tests.
"""

import json
from pathlib import Path
from typing import List

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tashkentforecast.core.models import SheetTable


SAMPLE_HEADERS: List[str] = [
    "Наименование ЖК",
    "Застройщик",
    "Район",
    "Класс",
    "Цена сентябрь",
    "Цена октябрь",
    "Цена ноябрь",
]


def _row(name, developer, district, cls, *prices) -> dict:
    return dict(zip(SAMPLE_HEADERS, [name, developer, district, cls, *prices]))


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="function")
def test_config(monkeypatch):
    """Create test configuration from a clean environment.

    Yields:
        Config object configured for testing.
    """
    monkeypatch.setenv("TASHKENTFORECAST_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("TASHKENTFORECAST_SHEET_ID", "test-sheet-id")
    monkeypatch.setenv("TASHKENTFORECAST_SHEET_NAME", "Цены (Актуальные)")

    from tashkentforecast.config import reset_config, get_config
    reset_config()

    config = get_config()
    yield config

    reset_config()


@pytest.fixture(scope="function")
def sample_headers() -> List[str]:
    """Header row with three monthly price columns."""
    return list(SAMPLE_HEADERS)


@pytest.fixture(scope="function")
def sample_rows() -> List[dict]:
    """Sheet rows covering kept and dropped complexes.

    Kept: Nest One, Tashkent City Boulevard, Comfort Park, Mirzo Residence,
    Olmazor City. Dropped: Elite Tower (unknown class), the nameless row,
    Empty Prices (no valid price).
    """
    return [
        _row("Nest One", "Murad Buildings", "Мирабадский р-н", "Премиум", 2500, "$2,600", "2 750"),
        _row("Tashkent City Boulevard", "", "Яккасарайский", "Бизнес", "1500", "-", 1650),
        _row("Comfort Park", "Golden House", "Сергели", "комфорт", 900, 950, ""),
        _row("Mirzo Residence", "", "Мирзо-Улугбекский", "комфорт, бизнес", "", 1400, 1400),
        _row("Elite Tower", "", "Мирабад", "элит", 3000, 3100, 3200),
        _row("", "", "Мирабад", "Комфорт", 800, 800, 800),
        _row("Empty Prices", "", "Алмазар", "Комфорт", "-", "", None),
        _row("Olmazor City", "", "", "Комфорт", 1000, 1100, 1200),
    ]


@pytest.fixture(scope="function")
def sample_table(sample_headers, sample_rows) -> SheetTable:
    """Decoded sheet built from the sample rows."""
    return SheetTable(headers=sample_headers, rows=sample_rows)


def build_gviz_payload(headers: List[str], rows: List[dict]) -> str:
    """Wrap rows the way the Visualization API does."""
    cols = [{"id": chr(65 + i), "label": h, "type": "string"} for i, h in enumerate(headers)]
    gviz_rows = []
    for row in rows:
        cells = []
        for header in headers:
            value = row.get(header)
            cells.append(None if value is None else {"v": value})
        gviz_rows.append({"c": cells})
    body = {
        "version": "0.6",
        "reqId": "0",
        "status": "ok",
        "table": {"cols": cols, "rows": gviz_rows},
    }
    return (
        "/*O_o*/\ngoogle.visualization.Query.setResponse("
        + json.dumps(body, ensure_ascii=False)
        + ");"
    )


@pytest.fixture(scope="function")
def payload_factory():
    """Build a JSONP response text from headers and rows."""
    return build_gviz_payload


@pytest.fixture(scope="function")
def sample_payload(sample_headers, sample_rows) -> str:
    """JSONP response text for the sample rows."""
    return build_gviz_payload(sample_headers, sample_rows)


@pytest.fixture(scope="function")
def model():
    """Default fuzzy TSK model."""
    from tashkentforecast.forecasting.fuzzy_tsk import FuzzyTSKModel
    return FuzzyTSKModel()
