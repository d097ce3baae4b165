"""
Unit tests for the Google Sheets source.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from tashkentforecast.config import SheetConfig
from tashkentforecast.exceptions import FetchError, PayloadParseError
from tashkentforecast.source.sheets import (
    build_sheet_url,
    fetch_sheet_text,
    load_sheet,
    load_sheet_file,
    parse_sheet_response,
)

WRAPPER = "/*O_o*/\ngoogle.visualization.Query.setResponse({body});"


def _wrap(body) -> str:
    return WRAPPER.format(body=json.dumps(body, ensure_ascii=False))


def _response(text="", status_code=200):
    response = MagicMock()
    response.text = text
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error", response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response


class TestBuildSheetUrl:
    """Tests for build_sheet_url function."""

    def test_plain_name(self):
        url = build_sheet_url("abc", "Prices")
        assert url == "https://docs.google.com/spreadsheets/d/abc/gviz/tq?tqx=out:json&sheet=Prices"

    def test_name_is_percent_encoded(self):
        url = build_sheet_url("abc", "Цены (Актуальные)")
        assert " " not in url
        assert "(" not in url
        assert url.endswith("&sheet=%D0%A6%D0%B5%D0%BD%D1%8B%20%28%D0%90%D0%BA%D1%82%D1%83%D0%B0%D0%BB%D1%8C%D0%BD%D1%8B%D0%B5%29")


class TestParseSheetResponse:
    """Tests for parse_sheet_response function."""

    def test_sample_payload(self, sample_payload, sample_headers):
        table = parse_sheet_response(sample_payload)
        assert table.headers == sample_headers
        assert len(table.rows) == 8
        assert table.rows[0]["Наименование ЖК"] == "Nest One"
        assert table.rows[0]["Цена сентябрь"] == 2500
        assert table.rows[0]["Цена октябрь"] == "$2,600"

    def test_null_cells_become_empty(self, sample_payload):
        table = parse_sheet_response(sample_payload)
        empty_prices = table.rows[6]
        assert empty_prices["Наименование ЖК"] == "Empty Prices"
        assert empty_prices["Цена ноябрь"] == ""

    def test_null_value_inside_cell(self):
        body = {
            "status": "ok",
            "table": {
                "cols": [{"label": "Наименование ЖК"}, {"label": "Класс"}, {"label": "Цена май"}],
                "rows": [{"c": [{"v": "X"}, None, {"v": None, "f": ""}]}],
            },
        }
        table = parse_sheet_response(_wrap(body))
        assert table.rows == [{"Наименование ЖК": "X", "Класс": "", "Цена май": ""}]

    def test_short_row_leaves_keys_missing(self):
        body = {
            "table": {
                "cols": [{"label": "Наименование ЖК"}, {"label": "Класс"}],
                "rows": [{"c": [{"v": "X"}]}],
            },
        }
        table = parse_sheet_response(_wrap(body))
        assert table.rows == [{"Наименование ЖК": "X"}]

    def test_missing_label_is_empty_string(self):
        body = {"table": {"cols": [{"id": "A"}, {"label": "Класс"}], "rows": []}}
        table = parse_sheet_response(_wrap(body))
        assert table.headers == ["", "Класс"]
        assert table.rows == []

    def test_falls_back_to_outer_braces(self):
        body = {"table": {"cols": [{"label": "Класс"}], "rows": [{"c": [{"v": "Бизнес"}]}]}}
        text = "callback(" + json.dumps(body) + ")\n"
        table = parse_sheet_response(text)
        assert table.rows == [{"Класс": "Бизнес"}]

    def test_status_error(self):
        body = {
            "status": "error",
            "errors": [{"reason": "access_denied", "message": "Access denied",
                        "detailed_message": "Sheet is private"}],
        }
        with pytest.raises(PayloadParseError, match="Sheet is private"):
            parse_sheet_response(_wrap(body))

    def test_missing_table(self):
        with pytest.raises(PayloadParseError):
            parse_sheet_response(_wrap({"status": "ok"}))

    def test_missing_rows(self):
        with pytest.raises(PayloadParseError):
            parse_sheet_response(_wrap({"table": {"cols": []}}))

    def test_missing_cols(self):
        with pytest.raises(PayloadParseError):
            parse_sheet_response(_wrap({"table": {"rows": []}}))

    def test_not_json(self):
        with pytest.raises(PayloadParseError):
            parse_sheet_response("<html>Not Found</html>")

    def test_not_an_object(self):
        with pytest.raises(PayloadParseError):
            parse_sheet_response("google.visualization.Query.setResponse([1, 2]);")

    def test_empty(self):
        with pytest.raises(PayloadParseError):
            parse_sheet_response("")


class TestFetchSheetText:
    """Tests for fetch_sheet_text function."""

    @patch("tashkentforecast.source.sheets.requests.get")
    def test_success(self, mock_get):
        mock_get.return_value = _response("payload")

        assert fetch_sheet_text("https://example.test/sheet", timeout=5) == "payload"
        mock_get.assert_called_once_with("https://example.test/sheet", timeout=5)

    @patch("tashkentforecast.source.sheets.time.sleep")
    @patch("tashkentforecast.source.sheets.requests.get")
    def test_client_error_not_retried(self, mock_get, mock_sleep):
        mock_get.return_value = _response(status_code=404)

        with pytest.raises(FetchError) as exc_info:
            fetch_sheet_text("https://example.test/sheet", max_retries=3)

        assert exc_info.value.status_code == 404
        assert exc_info.value.url == "https://example.test/sheet"
        assert mock_get.call_count == 1
        mock_sleep.assert_not_called()

    @patch("tashkentforecast.source.sheets.time.sleep")
    @patch("tashkentforecast.source.sheets.requests.get")
    def test_single_attempt_by_default(self, mock_get, mock_sleep):
        mock_get.return_value = _response(status_code=503)

        with pytest.raises(FetchError):
            fetch_sheet_text("https://example.test/sheet")

        assert mock_get.call_count == 1
        mock_sleep.assert_not_called()

    @patch("tashkentforecast.source.sheets.time.sleep")
    @patch("tashkentforecast.source.sheets.requests.get")
    def test_server_error_retried_with_backoff(self, mock_get, mock_sleep):
        mock_get.side_effect = [
            _response(status_code=503),
            _response(status_code=429),
            _response("payload"),
        ]

        assert fetch_sheet_text("https://example.test/sheet", max_retries=2) == "payload"
        assert mock_get.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0]

    @patch("tashkentforecast.source.sheets.time.sleep")
    @patch("tashkentforecast.source.sheets.requests.get")
    def test_transport_error(self, mock_get, mock_sleep):
        mock_get.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(FetchError) as exc_info:
            fetch_sheet_text("https://example.test/sheet", max_retries=1)

        assert exc_info.value.status_code is None
        assert mock_get.call_count == 2

    @patch("tashkentforecast.source.sheets.requests.get")
    def test_timeout(self, mock_get):
        mock_get.side_effect = requests.Timeout("read timed out")

        with pytest.raises(FetchError, match="timed out"):
            fetch_sheet_text("https://example.test/sheet", timeout=0.1)


class TestLoadSheet:
    """Tests for load_sheet and load_sheet_file functions."""

    @patch("tashkentforecast.source.sheets.requests.get")
    def test_load_sheet(self, mock_get, sample_payload):
        mock_get.return_value = _response(sample_payload)
        config = SheetConfig(sheet_id="abc", sheet_name="Prices", timeout=5)

        table = load_sheet(config)

        assert len(table.rows) == 8
        mock_get.assert_called_once_with(
            "https://docs.google.com/spreadsheets/d/abc/gviz/tq?tqx=out:json&sheet=Prices",
            timeout=5,
        )

    @patch("tashkentforecast.source.sheets.requests.get")
    def test_load_sheet_uses_global_config(self, mock_get, test_config, sample_payload):
        mock_get.return_value = _response(sample_payload)

        load_sheet()

        url = mock_get.call_args.args[0]
        assert "/d/test-sheet-id/" in url

    def test_load_sheet_file(self, tmp_path, sample_payload, sample_headers):
        path = tmp_path / "response.txt"
        path.write_text(sample_payload, encoding="utf-8")

        table = load_sheet_file(path)

        assert table.headers == sample_headers
        assert len(table.rows) == 8

    def test_load_sheet_file_missing(self, tmp_path):
        with pytest.raises(PayloadParseError):
            load_sheet_file(tmp_path / "missing.txt")
