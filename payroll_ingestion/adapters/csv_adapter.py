"""
CSV source adapter for time-clock exports.

Uses csv.DictReader. Configurable: delimiter, encoding, skip_rows.
Handles BOM via utf-8-sig when encoding is utf-8. Streams rows; every
value is text exactly as exported.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Iterator

from payroll_ingestion.adapters.base import IMPORT_ROW_KEY


def _get_encoding(options: dict[str, Any]) -> str:
    enc = options.get("encoding", "utf-8")
    if enc.lower() == "utf-8":
        return "utf-8-sig"  # Strip BOM if present
    return enc


class CsvSourceAdapter:
    """Read CSV punch exports as one dict per row; the first row is the header."""

    def read(self, source_path: Path, options: dict[str, Any]) -> Iterator[dict[str, Any]]:
        encoding = _get_encoding(options)
        delimiter = options.get("delimiter", ",")
        skip_rows = int(options.get("skip_rows", 0))

        with source_path.open("r", encoding=encoding, newline="") as f:
            for _ in range(skip_rows):
                next(f, None)
            reader = csv.DictReader(f, delimiter=delimiter)
            for row in reader:
                # Skip fully blank lines left by spreadsheet exports
                if not any((v or "").strip() for v in row.values() if isinstance(v, str)):
                    continue
                # line_num counts the header as line 1
                row[IMPORT_ROW_KEY] = reader.line_num - 1
                yield row
