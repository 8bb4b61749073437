"""
Punch mapper: time-clock rows to ``Shift`` records.

Maps the logical fields ``employee_id``, ``date``, ``time_in`` and
``time_out`` onto source columns, normalizes the cell values the CSV and
XLSX adapters produce, and groups the resulting shifts by employee in
file order. Header matching ignores case, surrounding blanks and the
difference between spaces and underscores.

Row numbers in errors count data rows from 1, excluding the header. They
come from the adapter's ``_import_row`` when present, so blank rows the
adapter drops still count; plain row dicts are numbered as they arrive.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

from payroll_ingestion.adapters import (
    IMPORT_ROW_KEY,
    CsvSourceAdapter,
    SourceAdapter,
    XlsxSourceAdapter,
)
from payroll_kernel.domain.dtos import Shift
from payroll_kernel.domain.values import parse_clock_time
from payroll_kernel.exceptions import InvalidTimeFormatError, PunchImportError
from payroll_kernel.logging_config import get_logger

logger = get_logger("ingestion.punch_mapper")

DEFAULT_COLUMN_MAPPING: Mapping[str, str] = {
    "employee_id": "employee_id",
    "date": "date",
    "time_in": "time_in",
    "time_out": "time_out",
}

_ADAPTERS: dict[str, type] = {
    ".csv": CsvSourceAdapter,
    ".xlsx": XlsxSourceAdapter,
}


def _normalize_key(key: Any) -> str:
    return "_".join(str(key).strip().lower().replace("_", " ").split())


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_employee_id(value: Any, row_number: int) -> str:
    if _is_blank(value):
        raise PunchImportError("missing employee id", row_number)
    if isinstance(value, float) and value == int(value):
        value = int(value)
    return str(value).strip()


def _parse_work_date(value: Any, row_number: int) -> date:
    if _is_blank(value):
        raise PunchImportError("missing date", row_number)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise PunchImportError(f"invalid date {value!r}, expected YYYY-MM-DD", row_number) from exc
    raise PunchImportError(f"invalid date {value!r}", row_number)


def _parse_punch(value: Any, column: str, row_number: int) -> time | None:
    if _is_blank(value):
        return None
    try:
        return parse_clock_time(value)
    except InvalidTimeFormatError as exc:
        raise PunchImportError(f"{column}: {exc}", row_number) from exc


def map_rows_to_shifts(
    rows: Iterable[Mapping[str, Any]],
    mapping: Mapping[str, str] | None = None,
) -> dict[str, tuple[Shift, ...]]:
    """
    Group punch rows into shifts per employee.

    Args:
        rows: Row dicts as yielded by a source adapter.
        mapping: Logical field -> source column. Defaults to
            ``DEFAULT_COLUMN_MAPPING``; missing entries fall back to it.

    Returns:
        ``{employee_id: (Shift, ...)}`` with employees and shifts in file order.
        Blank punches become ``None`` and are rejected later, when the
        shift is classified.

    Raises:
        PunchImportError: A row has no employee id or date, or a malformed
            date or punch time.
    """
    columns = {**DEFAULT_COLUMN_MAPPING, **(mapping or {})}
    wanted = {field: _normalize_key(col) for field, col in columns.items()}

    grouped: dict[str, list[Shift]] = {}
    row_count = 0
    for index, raw in enumerate(rows, start=1):
        row_number = raw.get(IMPORT_ROW_KEY) or index
        row = {
            _normalize_key(k): v
            for k, v in raw.items()
            if k is not None and k != IMPORT_ROW_KEY
        }
        employee_id = _parse_employee_id(row.get(wanted["employee_id"]), row_number)
        shift = Shift(
            work_date=_parse_work_date(row.get(wanted["date"]), row_number),
            time_in=_parse_punch(row.get(wanted["time_in"]), "time_in", row_number),
            time_out=_parse_punch(row.get(wanted["time_out"]), "time_out", row_number),
            employee_id=employee_id,
        )
        grouped.setdefault(employee_id, []).append(shift)
        row_count = index

    logger.info(
        "punch_rows_mapped",
        extra={"row_count": row_count, "employee_count": len(grouped)},
    )
    return {employee_id: tuple(shifts) for employee_id, shifts in grouped.items()}


def adapter_for(path: Path) -> SourceAdapter:
    """Source adapter for a file, chosen by suffix."""
    adapter_cls = _ADAPTERS.get(path.suffix.lower())
    if adapter_cls is None:
        raise PunchImportError(
            f"Unsupported punch file type {path.suffix!r}; expected one of {sorted(_ADAPTERS)}"
        )
    return adapter_cls()


def read_shifts(
    path: Path | str,
    options: dict[str, Any] | None = None,
    mapping: Mapping[str, str] | None = None,
) -> dict[str, tuple[Shift, ...]]:
    """Read a CSV or XLSX time-clock export into shifts grouped by employee."""
    path = Path(path)
    adapter = adapter_for(path)
    logger.info("punch_import_started", extra={"source_path": str(path)})
    return map_rows_to_shifts(adapter.read(path, options or {}), mapping)
