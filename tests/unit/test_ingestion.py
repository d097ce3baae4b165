"""
Unit tests for ingestion module.
"""

import copy

import pytest

from tashkentforecast.pipeline.ingestion import (
    SheetColumns,
    build_entity,
    find_price_columns,
    ingest,
)


class TestFindPriceColumns:
    """Tests for find_price_columns function."""

    def test_discovers_in_header_order(self, sample_headers):
        columns = find_price_columns(sample_headers)
        assert [c.header for c in columns] == ["Цена сентябрь", "Цена октябрь", "Цена ноябрь"]
        assert [c.period for c in columns] == ["сентябрь", "октябрь", "ноябрь"]
        assert [c.index for c in columns] == [4, 5, 6]

    def test_case_insensitive_prefix(self):
        columns = find_price_columns(["ЦЕНА декабрь", "цена январь"])
        assert [c.period for c in columns] == ["декабрь", "январь"]

    def test_order_is_not_sorted(self):
        columns = find_price_columns(["Цена октябрь", "Класс", "Цена август"])
        assert [c.period for c in columns] == ["октябрь", "август"]

    def test_prefix_requires_separator(self):
        columns = find_price_columns(["Ценаоктябрь", "Цена за м2"])
        assert [c.header for c in columns] == ["Цена за м2"]
        assert columns[0].index == 1

    def test_ignores_blank_headers(self):
        assert find_price_columns(["", None, "Район"]) == []


class TestBuildEntity:
    """Tests for build_entity function."""

    def test_mixed_price_cells(self):
        headers = ["Наименование ЖК", "Класс", "Цена июль", "Цена август", "Цена сентябрь"]
        columns = find_price_columns(headers)
        row = {
            "Наименование ЖК": "Test ЖК",
            "Класс": "Комфорт",
            "Цена июль": "-",
            "Цена август": "1500",
            "Цена сентябрь": "",
        }
        entity = build_entity(row, columns)
        assert entity is not None
        assert entity.price_values == [1500.0]
        assert entity.price_labels == ["август"]
        assert entity.trend == 0

    def test_zero_and_negative_prices_dropped(self):
        columns = find_price_columns(["Цена a", "Цена b", "Цена c"])
        row = {"Наименование ЖК": "X", "Класс": "Бизнес", "Цена a": 0, "Цена b": -10, "Цена c": 900}
        assert build_entity(row, columns).price_values == [900]

    def test_overflowing_price_dropped(self):
        columns = find_price_columns(["Цена a", "Цена b"])
        row = {"Наименование ЖК": "X", "Класс": "Комфорт", "Цена a": "9" * 400, "Цена b": 1200}
        assert build_entity(row, columns).price_values == [1200]

    def test_only_overflowing_price_skipped(self):
        columns = find_price_columns(["Цена a"])
        row = {"Наименование ЖК": "X", "Класс": "Комфорт", "Цена a": "9" * 400}
        assert build_entity(row, columns) is None

    def test_missing_name_skipped(self):
        columns = find_price_columns(["Цена a"])
        assert build_entity({"Класс": "Бизнес", "Цена a": 900}, columns) is None
        assert build_entity({"Наименование ЖК": "", "Класс": "Бизнес", "Цена a": 900}, columns) is None

    def test_unknown_category_skipped(self):
        columns = find_price_columns(["Цена a"])
        row = {"Наименование ЖК": "X", "Класс": "элит", "Цена a": 900}
        assert build_entity(row, columns) is None

    def test_no_valid_prices_skipped(self):
        columns = find_price_columns(["Цена a", "Цена b"])
        row = {"Наименование ЖК": "X", "Класс": "Комфорт", "Цена a": "-", "Цена b": ""}
        assert build_entity(row, columns) is None

    def test_trend_from_first_and_last(self):
        columns = find_price_columns(["Цена a", "Цена b", "Цена c"])
        row = {"Наименование ЖК": "X", "Класс": "Комфорт", "Цена a": 1000, "Цена b": 900, "Цена c": 1200}
        entity = build_entity(row, columns)
        assert entity.first_price == 1000
        assert entity.last_price == 1200
        assert entity.trend == pytest.approx(0.2)
        assert entity.trend_percent == 20.0

    def test_custom_column_labels(self):
        columns = SheetColumns(name="ЖК", category="Сегмент", region="Локация", price_prefix="price ")
        price_columns = find_price_columns(["Price Q1", "Price Q2"], columns.price_prefix)
        row = {"ЖК": "X", "Сегмент": "премиум", "Локация": "мирабад", "Price Q1": 10, "Price Q2": 11}
        entity = build_entity(row, price_columns, columns)
        assert entity.category == "Премиум"
        assert entity.region == "Мирабадский"
        assert entity.price_labels == ["Q1", "Q2"]


class TestIngest:
    """Tests for ingest function."""

    def test_keeps_usable_rows_in_order(self, sample_headers, sample_rows):
        result = ingest(sample_headers, sample_rows)
        assert [e.name for e in result.entities] == [
            "Nest One",
            "Tashkent City Boulevard",
            "Comfort Park",
            "Mirzo Residence",
            "Olmazor City",
        ]

    def test_unknown_category_dropped(self, sample_headers, sample_rows):
        result = ingest(sample_headers, sample_rows)
        assert "Elite Tower" not in [e.name for e in result.entities]

    def test_mixed_label_goes_to_business(self, sample_headers, sample_rows):
        result = ingest(sample_headers, sample_rows)
        names = [e.name for e in result.category_groups["Бизнес"]]
        assert names == ["Tashkent City Boulevard", "Mirzo Residence"]

    def test_category_groups_first_appearance_order(self, sample_headers, sample_rows):
        result = ingest(sample_headers, sample_rows)
        assert list(result.category_groups) == ["Премиум", "Бизнес", "Комфорт"]

    def test_region_groups_skip_empty_region(self, sample_headers, sample_rows):
        result = ingest(sample_headers, sample_rows)
        assert list(result.region_groups) == [
            "Мирабадский",
            "Яккасарийский",
            "Сергели",
            "Мирзо-Улугбекский",
        ]
        olmazor = result.entities[-1]
        assert olmazor.region is None
        assert olmazor in result.category_groups["Комфорт"]

    def test_developer_carried(self, sample_headers, sample_rows):
        result = ingest(sample_headers, sample_rows)
        assert result.entities[0].developer == "Murad Buildings"
        assert result.entities[1].developer is None

    def test_no_price_columns_returns_empty(self, sample_rows):
        result = ingest(["Наименование ЖК", "Класс", "Район"], sample_rows)
        assert result.price_columns == []
        assert result.entities == []
        assert result.category_groups == {}
        assert result.region_groups == {}

    def test_rows_not_mutated(self, sample_headers, sample_rows):
        before = copy.deepcopy(sample_rows)
        ingest(sample_headers, sample_rows)
        assert sample_rows == before

    def test_idempotent(self, sample_headers, sample_rows):
        first = ingest(sample_headers, sample_rows)
        second = ingest(sample_headers, sample_rows)
        assert first == second
        assert [e.to_dict() for e in first.entities] == [e.to_dict() for e in second.entities]
