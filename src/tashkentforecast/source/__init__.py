"""
Spreadsheet data source.

Handles fetching and decoding the published price sheet.
"""

from tashkentforecast.source.sheets import (
    build_sheet_url,
    fetch_sheet_text,
    load_sheet,
    load_sheet_file,
    parse_sheet_response,
)

__all__ = [
    "build_sheet_url",
    "fetch_sheet_text",
    "load_sheet",
    "load_sheet_file",
    "parse_sheet_response",
]
