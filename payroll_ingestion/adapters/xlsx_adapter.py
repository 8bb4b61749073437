"""
XLSX source adapter for time-clock exports.

Layout options:
  - sheet by index (0-based) or name; default is the active sheet
  - skip_rows before the header row
  - the first row after skip_rows holds the column names

Date and time cells keep their native ``datetime`` / ``time`` values so
that nothing is lost to text formatting; text cells are stripped and
empty cells become ``""``.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Iterator

import openpyxl

from payroll_ingestion.adapters.base import IMPORT_ROW_KEY


def _normalize_header_cell(value: Any) -> str:
    """Normalize a header cell for use as a key."""
    if value is None:
        return ""
    return re.sub(r"\s+", " ", str(value)).strip()


def _cell_value(value: Any) -> Any:
    """Normalize one data cell value from openpyxl."""
    if value is None:
        return ""
    if isinstance(value, float) and value == int(value):
        return int(value)
    if isinstance(value, str):
        return value.strip()
    return value


class XlsxSourceAdapter:
    """
    Read .xlsx punch exports as one dict per row.

    source_options:
      sheet: 0-based sheet index (int) or sheet name (str). Default: active sheet.
      skip_rows: number of rows to skip at the top of the sheet before the header.
    """

    def read(self, source_path: Path, options: dict[str, Any]) -> Iterator[dict[str, Any]]:
        wb = openpyxl.load_workbook(source_path, read_only=True, data_only=True)
        try:
            sheet = self._get_sheet(wb, options)
            skip_rows = int(options.get("skip_rows", 0))

            rows = sheet.iter_rows(min_row=1 + skip_rows, values_only=True)
            header_row = next(rows, None)
            if header_row is None:
                return

            headers: list[str] = []
            for c, v in enumerate(header_row):
                key = _normalize_header_cell(v) or f"Column_{c+1}"
                # Dedupe duplicate headers
                base = key
                cnt = 0
                while key in headers:
                    cnt += 1
                    key = f"{base}_{cnt}"
                headers.append(key)

            for row_number, row in enumerate(rows, start=1):
                vals = [_cell_value(v) for v in row[: len(headers)]]
                if not any(v != "" for v in vals):
                    continue
                record = dict(zip(headers, vals))
                record[IMPORT_ROW_KEY] = row_number
                yield record
        finally:
            wb.close()

    def _get_sheet(self, wb: Any, options: dict[str, Any]) -> Any:
        sheet_ref = options.get("sheet")
        if sheet_ref is None:
            return wb.active
        if isinstance(sheet_ref, int):
            return wb.worksheets[sheet_ref]
        return wb[sheet_ref]
