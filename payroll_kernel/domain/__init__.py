"""Payroll domain: value conversions, schedule/policy configuration and DTOs."""

from payroll_kernel.domain.dtos import (
    AttendanceStatus,
    AttendanceSummary,
    ClassifiedShift,
    DeductionSet,
    Employee,
    PayComponents,
    PayPeriod,
    PayrollRecord,
    PayrollRun,
    Shift,
    WeeklyAttendanceStatus,
    WeeklyHours,
)
from payroll_kernel.domain.schedule import (
    DEFAULT_POLICY,
    DEFAULT_SCHEDULE,
    PayrollPolicy,
    ScheduleConfig,
)
from payroll_kernel.domain.values import parse_clock_time, to_decimal

__all__ = [
    "AttendanceStatus",
    "AttendanceSummary",
    "ClassifiedShift",
    "DeductionSet",
    "Employee",
    "PayComponents",
    "PayPeriod",
    "PayrollRecord",
    "PayrollRun",
    "Shift",
    "WeeklyAttendanceStatus",
    "WeeklyHours",
    "DEFAULT_POLICY",
    "DEFAULT_SCHEDULE",
    "PayrollPolicy",
    "ScheduleConfig",
    "parse_clock_time",
    "to_decimal",
]
