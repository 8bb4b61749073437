"""
Domain DTOs -- Immutable records flowing through the payroll pipeline.

Responsibility:
    Defines the inputs (shifts, employees, pay periods) and every derived
    result (classified shifts, weekly hours, pay components, deductions,
    payroll records, attendance summaries) as frozen dataclasses.

Architecture position:
    Kernel > Domain -- pure data definitions with ZERO I/O. Engines build
    these; services compose them; nothing mutates them.

Invariants enforced:
    - All monetary and hour fields are ``Decimal``.
    - ``WeeklyHours.total_hours == regular_hours + overtime_hours``.
    - ``PayComponents.gross_pay == regular_pay + overtime_pay``.
    - ``DeductionSet.total_deductions`` is the sum of the four deductions.
    - ``PayPeriod`` is inclusive on both ends and never inverted.

Failure modes:
    - InvalidPayInputError for an employee without a positive hourly rate.
    - InvalidPayPeriodError for a period whose end precedes its start.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum

from payroll_kernel.domain.values import ZERO, to_decimal
from payroll_kernel.exceptions import InvalidPayInputError, InvalidPayPeriodError
from payroll_kernel.logging_config import get_logger

logger = get_logger("domain.dtos")


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Shift:
    """
    One recorded clock-in/clock-out pair.

    Times stay as recorded by the time clock (``HH:MM`` text or ``time``);
    they are parsed when the shift is classified. ``None`` marks a missing
    punch. A ``time_out`` earlier than ``time_in`` means the shift crossed
    midnight.
    """

    work_date: date
    time_in: str | time | None
    time_out: str | time | None
    employee_id: str | None = None


@dataclass(frozen=True)
class Employee:
    """An employee for payroll purposes. Identity and rate are owned by the caller."""

    id: str
    hourly_rate: Decimal
    department: str = ""
    position: str = ""
    employee_number: str = ""
    first_name: str = ""
    last_name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "hourly_rate", to_decimal(self.hourly_rate, "hourly_rate")
        )
        if self.hourly_rate <= 0:
            logger.warning(
                "employee_non_positive_rate",
                extra={
                    "employee_id": self.id,
                    "hourly_rate": str(self.hourly_rate),
                },
            )
            raise InvalidPayInputError("hourly_rate", self.hourly_rate)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class PayPeriod:
    """A payroll window, inclusive of both ``start`` and ``end``."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise InvalidPayPeriodError(self.start, self.end)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @property
    def days(self) -> tuple[date, ...]:
        """Every calendar day in the period, ascending."""
        count = (self.end - self.start).days + 1
        return tuple(self.start + timedelta(days=i) for i in range(count))

    @property
    def label(self) -> str:
        return f"{self.start.isoformat()}/{self.end.isoformat()}"


# ---------------------------------------------------------------------------
# Derived results
# ---------------------------------------------------------------------------


class AttendanceStatus(str, Enum):
    """Attendance outcome of a single shift."""

    LATE = "late"
    UNDERTIME = "undertime"
    OVERTIME = "overtime"
    ON_TIME = "on_time"


class WeeklyAttendanceStatus(str, Enum):
    """Whether an employee's period hours meet the weekly target."""

    ON_TRACK = "on_track"
    INCOMPLETE = "incomplete"


@dataclass(frozen=True)
class ClassifiedShift:
    """Minutes of one shift split into regular, late, undertime and overtime."""

    regular_hours: Decimal
    late_minutes: int
    undertime_minutes: int
    overtime_minutes: int

    @classmethod
    def zero(cls) -> ClassifiedShift:
        return cls(
            regular_hours=ZERO,
            late_minutes=0,
            undertime_minutes=0,
            overtime_minutes=0,
        )


@dataclass(frozen=True)
class WeeklyHours:
    """Hours aggregated over a pay period."""

    regular_hours: Decimal
    overtime_hours: Decimal
    total_hours: Decimal
    shift_count: int = 0
    late_minutes: int = 0
    undertime_minutes: int = 0

    @classmethod
    def zero(cls) -> WeeklyHours:
        return cls(regular_hours=ZERO, overtime_hours=ZERO, total_hours=ZERO)


@dataclass(frozen=True)
class PayComponents:
    """Gross pay split into its regular and overtime parts."""

    regular_pay: Decimal
    overtime_pay: Decimal
    gross_pay: Decimal


@dataclass(frozen=True)
class DeductionSet:
    """Period share of the statutory deductions, and the resulting net pay."""

    sss_deduction: Decimal
    philhealth_deduction: Decimal
    pagibig_deduction: Decimal
    tax_deduction: Decimal
    total_deductions: Decimal
    net_pay: Decimal


@dataclass(frozen=True)
class AttendanceSummary:
    """Attendance for one employee over a pay period."""

    days_present: int
    total_hours: Decimal
    late_count: int
    undertime_count: int
    overtime_count: int
    status: WeeklyAttendanceStatus


@dataclass(frozen=True)
class PayrollRecord:
    """
    Full payroll result for one employee and one period.

    Every intermediate figure is kept for display and audit.
    """

    employee_id: str
    period_start: date
    period_end: date
    regular_hours: Decimal
    overtime_hours: Decimal
    total_hours: Decimal
    late_minutes: int
    undertime_minutes: int
    regular_pay: Decimal
    overtime_pay: Decimal
    gross_pay: Decimal
    sss_deduction: Decimal
    philhealth_deduction: Decimal
    pagibig_deduction: Decimal
    tax_deduction: Decimal
    total_deductions: Decimal
    net_pay: Decimal

    def to_dict(self) -> dict[str, str | int]:
        """Plain-value rendering; dates as ISO text, amounts as Decimal text."""
        result: dict[str, str | int] = {}
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if isinstance(value, date):
                value = value.isoformat()
            elif isinstance(value, Decimal):
                value = str(value)
            result[name] = value
        return result


@dataclass(frozen=True)
class PayrollRun:
    """
    Payroll records for every paid employee in one period.

    ``skip_reasons`` maps each skipped employee id to ``no_shifts_in_period``
    or ``zero_gross_pay``.
    """

    period: PayPeriod
    records: tuple[PayrollRecord, ...]
    skipped_employee_ids: tuple[str, ...] = ()
    skip_reasons: dict[str, str] = field(default_factory=dict)
    department: str | None = None

    @property
    def total_gross_pay(self) -> Decimal:
        return sum((r.gross_pay for r in self.records), ZERO)

    @property
    def total_deductions(self) -> Decimal:
        return sum((r.total_deductions for r in self.records), ZERO)

    @property
    def total_net_pay(self) -> Decimal:
        return sum((r.net_pay for r in self.records), ZERO)
