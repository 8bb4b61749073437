"""
PayrollSettings schema.

The runtime configuration artifact: a named, versioned pairing of the
attendance schedule and the pay policy, together with the checksum of the
YAML document it was parsed from.
"""

from __future__ import annotations

from dataclasses import dataclass

from payroll_kernel.domain.schedule import PayrollPolicy, ScheduleConfig


@dataclass(frozen=True)
class PayrollSettings:
    """Schedule and policy in force for a payroll run."""

    name: str
    version: int
    schedule: ScheduleConfig
    policy: PayrollPolicy
    checksum: str
