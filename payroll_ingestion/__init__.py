"""
payroll_ingestion -- Time-clock punch import.

Reads CSV and XLSX time-clock exports and maps them to ``Shift`` records
grouped by employee.

Architecture:
    payroll_ingestion/ is a top-level package. Nothing in the kernel or the
    engines imports from ingestion.
"""

from payroll_ingestion.punch_mapper import (
    DEFAULT_COLUMN_MAPPING,
    adapter_for,
    map_rows_to_shifts,
    read_shifts,
)

__all__ = [
    "DEFAULT_COLUMN_MAPPING",
    "adapter_for",
    "map_rows_to_shifts",
    "read_shifts",
]
