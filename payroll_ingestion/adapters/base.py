"""
Source adapter protocol for time-clock exports.

Contract:
    SourceAdapter.read() yields one dict per punch row, keyed by the
    file's header cells, plus ``_import_row``: the 1-based data row the
    record came from (header and skipped rows excluded, blank rows
    counted).

Architecture: payroll_ingestion/adapters. File I/O only, no engine imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator, Protocol, runtime_checkable

IMPORT_ROW_KEY = "_import_row"


@runtime_checkable
class SourceAdapter(Protocol):
    """Protocol for reading time-clock export files into row dicts."""

    def read(self, source_path: Path, options: dict[str, Any]) -> Iterator[dict[str, Any]]:
        """Yield one dict per data row. Streams where the format allows."""
        ...
