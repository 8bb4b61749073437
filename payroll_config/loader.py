"""
Configuration Loader (``payroll_config.loader``).

Responsibility
--------------
Loads a YAML settings document and parses it into the frozen
``ScheduleConfig`` / ``PayrollPolicy`` values wrapped in a
``PayrollSettings``. The single public entry point for runtime config is
``payroll_config.get_active_config()``.

Architecture position
---------------------
**Config layer** -- sits above ``payroll_kernel`` and below
``payroll_services``. The kernel and engines never import from here.

Invariants enforced
-------------------
* Parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; unknown keys are rejected rather than ignored.
* Times of day must be quoted strings. Unquoted ``8:00`` is read by YAML
  as a base-60 integer and is refused.
* Money and hour amounts are read as strings or integers, never floats.
* ``compute_checksum`` produces a deterministic SHA-256 hash of the parsed
  document.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing ``name`` / ``version``  -> ``KeyError`` propagates.
* Wrong value types or failed validation  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import fields
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from payroll_config.schema import PayrollSettings
from payroll_kernel.domain.schedule import PayrollPolicy, ScheduleConfig
from payroll_kernel.domain.values import to_decimal
from payroll_kernel.exceptions import InvalidTimeFormatError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data


def _check_keys(section: str, data: dict[str, Any], allowed: set[str]) -> None:
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ValueError(f"{section}: unknown keys {unknown}")


def _parse_int(section: str, key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{section}.{key} must be an integer, got {value!r}")
    return value


def _parse_decimal(section: str, key: str, value: Any) -> Decimal:
    # Floats would carry binary rounding into money math
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError(
            f"{section}.{key} must be a quoted decimal string, got {value!r}"
        )
    return to_decimal(value, f"{section}.{key}")


def parse_schedule(data: dict[str, Any]) -> ScheduleConfig:
    """
    Parse a ``ScheduleConfig`` from the ``schedule`` section.

    Omitted keys keep the ``ScheduleConfig`` defaults.

    Raises:
        ValueError: unknown key, wrong type, or failed schedule validation.
    """
    _check_keys("schedule", data, {f.name for f in fields(ScheduleConfig)})
    kwargs: dict[str, Any] = {}
    if "expected_time_in" in data:
        value = data["expected_time_in"]
        if not isinstance(value, str):
            raise ValueError(
                f"schedule.expected_time_in must be a quoted 'HH:MM' string, got {value!r}"
            )
        kwargs["expected_time_in"] = value
    for key in ("grace_period_minutes", "standard_shift_minutes", "meal_break_minutes"):
        if key in data:
            kwargs[key] = _parse_int("schedule", key, data[key])
    try:
        return ScheduleConfig(**kwargs)
    except InvalidTimeFormatError as exc:
        raise ValueError(f"schedule.expected_time_in: {exc}") from exc


def parse_policy(data: dict[str, Any]) -> PayrollPolicy:
    """
    Parse a ``PayrollPolicy`` from the ``policy`` section.

    Omitted keys keep the ``PayrollPolicy`` defaults.

    Raises:
        ValueError: unknown key, float or non-numeric value, or failed
            policy validation.
    """
    _check_keys("policy", data, {f.name for f in fields(PayrollPolicy)})
    kwargs = {key: _parse_decimal("policy", key, value) for key, value in data.items()}
    return PayrollPolicy(**kwargs)


def parse_settings(data: dict[str, Any]) -> PayrollSettings:
    """
    Parse a full settings document.

    Preconditions:
        - ``data`` contains ``name`` and ``version``; ``schedule`` and
          ``policy`` sections are optional mappings.
    Raises:
        KeyError: if ``name`` or ``version`` is missing.
        ValueError: on any schema violation.
    """
    _check_keys("settings", data, {"name", "version", "schedule", "policy"})
    schedule_data = data.get("schedule") or {}
    policy_data = data.get("policy") or {}
    if not isinstance(schedule_data, dict) or not isinstance(policy_data, dict):
        raise ValueError("settings: 'schedule' and 'policy' must be mappings")

    return PayrollSettings(
        name=str(data["name"]),
        version=_parse_int("settings", "version", data["version"]),
        schedule=parse_schedule(schedule_data),
        policy=parse_policy(policy_data),
        checksum=compute_checksum(data),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
