"""
Google Sheets Source

Fetches a published sheet through the Visualization API and decodes its
JSONP response into header labels and rows.

The response looks like:

    /*O_o*/
    google.visualization.Query.setResponse({"table": {"cols": [...], "rows": [...]}});

A missing or malformed table is a hard failure: rows are never recovered
from a partial payload.
"""

import json
import re
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

import requests

from tashkentforecast.config import SheetConfig, get_config
from tashkentforecast.core.constants import GVIZ_URL_TEMPLATE
from tashkentforecast.core.models import SheetTable
from tashkentforecast.exceptions import FetchError, PayloadParseError
from tashkentforecast.logging_config import get_logger

logger = get_logger(__name__)

_JSONP_WRAPPER = re.compile(
    r"google\.visualization\.Query\.setResponse\(([\s\S]*)\);?\s*$"
)


def build_sheet_url(sheet_id: str, sheet_name: str) -> str:
    """Build the Visualization API URL returning a sheet tab as JSON.

    Example:
        >>> build_sheet_url("abc", "Prices")
        "https://docs.google.com/spreadsheets/d/abc/gviz/tq?tqx=out:json&sheet=Prices"
    """
    return GVIZ_URL_TEMPLATE.format(
        sheet_id=sheet_id,
        sheet_name=quote(sheet_name, safe=""),
    )


def fetch_sheet_text(
    url: str,
    timeout: float = 30.0,
    max_retries: int = 0,
    backoff_base: float = 2.0,
) -> str:
    """Download the raw sheet response.

    Args:
        url: Visualization API URL.
        timeout: Seconds before a request is abandoned.
        max_retries: Extra attempts after a transport error, 5xx or 429.
        backoff_base: Base of the exponential wait between attempts.

    Returns:
        Response body text.

    Raises:
        FetchError: On a transport error or non-success status once
            attempts are exhausted. 4xx other than 429 fail immediately.
    """
    attempts = max_retries + 1
    last_error: Optional[Exception] = None
    for attempt in range(attempts):
        try:
            response = requests.get(url, timeout=timeout)
            response.raise_for_status()
            logger.info("Fetched %d bytes from sheet", len(response.text))
            return response.text

        except requests.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            retryable = status_code is None or status_code >= 500 or status_code == 429
            if not retryable or attempt + 1 >= attempts:
                raise FetchError(f"HTTP {status_code}", url=url, status_code=status_code) from exc
            last_error = exc

        except requests.RequestException as exc:
            if attempt + 1 >= attempts:
                raise FetchError(f"Request failed: {exc}", url=url) from exc
            last_error = exc

        wait_time = backoff_base ** attempt
        logger.warning(
            "Sheet fetch failed (attempt %d/%d): %s, retrying in %.1fs",
            attempt + 1, attempts, last_error, wait_time,
        )
        time.sleep(wait_time)

    raise FetchError("Sheet fetch failed", url=url)


def _extract_json(text: str) -> str:
    """Strip the JSONP wrapper, falling back to the outermost braces."""
    match = _JSONP_WRAPPER.search(text)
    if match:
        return match.group(1)
    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end < start:
        return text
    return text[start:end + 1]


def _cell_value(cell: Optional[Dict[str, Any]]) -> Any:
    if not cell:
        return ""
    value = cell.get("v")
    return "" if value is None else value


def parse_sheet_response(text: str) -> SheetTable:
    """Decode a Visualization API response into a table.

    Args:
        text: Raw response body.

    Returns:
        SheetTable with header labels and rows keyed by label.

    Raises:
        PayloadParseError: If the payload is not JSON or lacks a table.
    """
    if not text:
        raise PayloadParseError("Empty sheet response")

    try:
        data = json.loads(_extract_json(text))
    except json.JSONDecodeError as exc:
        raise PayloadParseError(f"Invalid JSON in sheet response: {exc}", source=text[:200]) from exc

    if not isinstance(data, dict):
        raise PayloadParseError("Sheet response is not an object", source=text[:200])

    if data.get("status") == "error":
        reasons = "; ".join(
            e.get("detailed_message") or e.get("message") or e.get("reason", "")
            for e in data.get("errors", [])
        )
        raise PayloadParseError(f"Sheet query failed: {reasons or 'unknown error'}", source=text[:200])

    table = data.get("table")
    if not isinstance(table, dict) or not isinstance(table.get("rows"), list):
        raise PayloadParseError("Sheet response has no table rows", source=text[:200])
    if not isinstance(table.get("cols"), list):
        raise PayloadParseError("Sheet response has no table columns", source=text[:200])

    headers: List[str] = [(col or {}).get("label") or "" for col in table["cols"]]

    rows = []
    for row in table["rows"]:
        record = {}
        for i, cell in enumerate((row or {}).get("c") or []):
            if i < len(headers):
                record[headers[i]] = _cell_value(cell)
        rows.append(record)

    logger.info("Parsed sheet: %d columns, %d rows", len(headers), len(rows))
    return SheetTable(headers=headers, rows=rows)


def load_sheet(config: Optional[SheetConfig] = None) -> SheetTable:
    """Fetch and decode the configured sheet.

    Raises:
        FetchError: If the download fails.
        PayloadParseError: If the response cannot be decoded.
    """
    if config is None:
        config = get_config().sheet

    url = config.url
    logger.info("Loading sheet %r", config.sheet_name)
    text = fetch_sheet_text(
        url,
        timeout=config.timeout,
        max_retries=config.max_retries,
        backoff_base=config.backoff_base,
    )
    return parse_sheet_response(text)


def load_sheet_file(path: Union[str, Path]) -> SheetTable:
    """Decode a sheet response previously saved to disk.

    Raises:
        PayloadParseError: If the file cannot be read or decoded.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PayloadParseError(f"Cannot read sheet file: {exc}", source=str(path)) from exc
    return parse_sheet_response(text)
