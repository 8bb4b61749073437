"""
Employee roster loader.

Reads a YAML roster of the form::

    employees:
      - id: E001
        hourly_rate: "125.50"
        department: Operations
        position: Picker
        employee_number: "0001"
        first_name: Ana
        last_name: Cruz

Only ``id`` and ``hourly_rate`` are required. Rates should be quoted so
they are read as exact decimals.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from payroll_kernel.domain.dtos import Employee
from payroll_kernel.exceptions import IngestionError, InvalidPayInputError

_OPTIONAL_FIELDS = ("department", "position", "employee_number", "first_name", "last_name")


class RosterError(IngestionError):
    """An employee roster entry is missing or malformed."""

    code: str = "ROSTER_ERROR"


def parse_employee(data: dict[str, Any], index: int) -> Employee:
    """Build an ``Employee`` from one roster entry (``index`` is 1-based)."""
    if not isinstance(data, dict):
        raise RosterError(f"Roster entry {index}: expected a mapping, got {data!r}")
    for key in ("id", "hourly_rate"):
        if data.get(key) in (None, ""):
            raise RosterError(f"Roster entry {index}: missing {key!r}")
    try:
        return Employee(
            id=str(data["id"]),
            hourly_rate=data["hourly_rate"],
            **{key: str(data[key]) for key in _OPTIONAL_FIELDS if data.get(key) is not None},
        )
    except (InvalidPayInputError, ValueError) as exc:
        raise RosterError(f"Roster entry {index}: {exc}") from exc


def load_roster(path: Path | str) -> tuple[Employee, ...]:
    """
    Load every employee from a roster YAML file, in file order.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file is not valid YAML.
        RosterError: if the document or any entry is malformed.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    entries = data.get("employees") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise RosterError(f"{path}: expected an 'employees' list")
    return tuple(parse_employee(entry, i) for i, entry in enumerate(entries, start=1))
