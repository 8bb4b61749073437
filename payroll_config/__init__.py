"""
payroll_config -- single public entrypoint for payroll configuration.

Responsibility:
    Provides the ONLY way to obtain schedule and policy settings at runtime
    through ``get_active_config()``. Services and scripts never read the
    YAML files themselves.

Architecture position:
    Configuration -- YAML-driven settings. This package sits above
    ``payroll_kernel`` and below ``payroll_services``. The kernel and the
    engines MUST NEVER import from ``payroll_config``.

Invariants enforced:
    - Single entrypoint: all runtime config flows through ``get_active_config()``.
    - Deterministic identity: the same YAML document always produces the
      same ``PayrollSettings.checksum``.

Failure modes:
    - ``FileNotFoundError`` -- the requested settings file does not exist.
    - ``yaml.YAMLError`` -- the file is not valid YAML.
    - ``KeyError`` / ``ValueError`` -- schema violations.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``PAYROLL_CONFIG_TRACE`` log entry with the settings name, version and
    checksum, tying each payroll run to the settings that produced it.
"""

from __future__ import annotations

from pathlib import Path

from payroll_config.loader import load_yaml_file, parse_settings
from payroll_config.schema import PayrollSettings
from payroll_kernel.logging_config import get_logger

_logger = get_logger("config")

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"


def get_active_config(config_path: Path | str | None = None) -> PayrollSettings:
    """The ONLY public configuration entrypoint.

    Args:
        config_path: Settings YAML to load. Defaults to
            ``payroll_config/sets/default.yaml``.

    Returns:
        PayrollSettings with validated schedule and policy.

    Raises:
        FileNotFoundError: If the settings file does not exist.
        KeyError: If ``name`` or ``version`` is missing.
        ValueError: If the document violates the settings schema.
    """
    path = Path(config_path) if config_path is not None else _DEFAULT_CONFIG_PATH
    settings = parse_settings(load_yaml_file(path))

    _logger.info(
        "PAYROLL_CONFIG_TRACE",
        extra={
            "trace_type": "PAYROLL_CONFIG_TRACE",
            "config_name": settings.name,
            "config_version": settings.version,
            "checksum": settings.checksum,
            "config_path": str(path),
            "expected_time_in": settings.schedule.expected_time_in,
            "overtime_multiplier": str(settings.policy.overtime_multiplier),
        },
    )
    return settings


__all__ = ["PayrollSettings", "get_active_config"]
