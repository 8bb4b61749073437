"""Source adapters for time-clock exports (file I/O only)."""

from payroll_ingestion.adapters.base import IMPORT_ROW_KEY, SourceAdapter
from payroll_ingestion.adapters.csv_adapter import CsvSourceAdapter
from payroll_ingestion.adapters.xlsx_adapter import XlsxSourceAdapter

__all__ = [
    "IMPORT_ROW_KEY",
    "SourceAdapter",
    "CsvSourceAdapter",
    "XlsxSourceAdapter",
]
