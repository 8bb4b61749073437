"""
Module: payroll_engines.week_aggregator
Responsibility:
    Sum per-shift classifications over a pay period into weekly hours, and
    summarize attendance (days present, late/undertime/overtime counts,
    on-track status) for the same window.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - The period window is inclusive on both ends.
    - Shifts are summed in ascending (work_date, time_in, time_out) order,
      so the result does not depend on the order the caller supplied.
    - total_hours == regular_hours + overtime_hours.

Failure modes:
    - InvalidPayPeriodError when period_end precedes period_start.
    - The first InvalidTimeFormatError / InvalidShiftWindowError raised by
      any retained shift propagates; no partial result is returned.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from payroll_engines.time_classifier import classify_shift
from payroll_engines.tracer import traced_engine
from payroll_kernel.domain.dtos import (
    AttendanceSummary,
    PayPeriod,
    Shift,
    WeeklyAttendanceStatus,
    WeeklyHours,
)
from payroll_kernel.domain.schedule import DEFAULT_SCHEDULE, ScheduleConfig
from payroll_kernel.domain.values import MINUTES_PER_HOUR, ZERO
from payroll_kernel.logging_config import get_logger

logger = get_logger("engines.week_aggregator")


def _sort_key(shift: Shift) -> tuple[date, str, str, str]:
    return (
        shift.work_date,
        str(shift.time_in or ""),
        str(shift.time_out or ""),
        shift.employee_id or "",
    )


def shifts_in_period(
    shifts: Sequence[Shift],
    period_start: date | None = None,
    period_end: date | None = None,
) -> list[Shift]:
    """
    Shifts dated inside ``[period_start, period_end]``, in summation order.

    An omitted bound leaves that side of the window open.
    """
    if period_start is None and period_end is None:
        return sorted(shifts, key=_sort_key)
    period = PayPeriod(period_start or date.min, period_end or date.max)
    return sorted((s for s in shifts if period.contains(s.work_date)), key=_sort_key)


@traced_engine(
    "week_aggregator", "1.0",
    fingerprint_fields=("shifts", "schedule", "period_start", "period_end"),
)
def aggregate_weekly_hours(
    shifts: Sequence[Shift],
    schedule: ScheduleConfig = DEFAULT_SCHEDULE,
    period_start: date | None = None,
    period_end: date | None = None,
) -> WeeklyHours:
    """
    Aggregate regular and overtime hours over a pay period.

    When both bounds are omitted every supplied shift is counted.

    Postconditions:
        - Empty input (or no shift in the window) yields ``WeeklyHours.zero()``.
        - ``total_hours == regular_hours + overtime_hours``.
    """
    retained = shifts_in_period(shifts, period_start, period_end)

    if not retained:
        logger.debug(
            "weekly_hours_no_shifts",
            extra={"supplied_count": len(shifts)},
        )
        return WeeklyHours.zero()

    regular_hours = ZERO
    overtime_hours = ZERO
    late_minutes = 0
    undertime_minutes = 0
    for shift in retained:
        classified = classify_shift(shift, schedule)
        regular_hours += classified.regular_hours
        overtime_hours += Decimal(classified.overtime_minutes) / Decimal(MINUTES_PER_HOUR)
        late_minutes += classified.late_minutes
        undertime_minutes += classified.undertime_minutes

    result = WeeklyHours(
        regular_hours=regular_hours,
        overtime_hours=overtime_hours,
        total_hours=regular_hours + overtime_hours,
        shift_count=len(retained),
        late_minutes=late_minutes,
        undertime_minutes=undertime_minutes,
    )

    logger.info(
        "weekly_hours_aggregated",
        extra={
            "supplied_count": len(shifts),
            "shift_count": result.shift_count,
            "regular_hours": str(result.regular_hours),
            "overtime_hours": str(result.overtime_hours),
            "late_minutes": late_minutes,
            "undertime_minutes": undertime_minutes,
        },
    )
    return result


def summarize_attendance(
    shifts: Sequence[Shift],
    schedule: ScheduleConfig = DEFAULT_SCHEDULE,
    period_start: date | None = None,
    period_end: date | None = None,
    weekly_hours_target: Decimal = Decimal("35"),
) -> AttendanceSummary:
    """
    Summarize attendance for one employee over a pay period.

    Days present counts distinct work dates. The period is ``incomplete``
    when total hours fall short of ``weekly_hours_target``.
    """
    retained = shifts_in_period(shifts, period_start, period_end)

    total_hours = ZERO
    late_count = undertime_count = overtime_count = 0
    for shift in retained:
        classified = classify_shift(shift, schedule)
        total_hours += classified.regular_hours
        total_hours += Decimal(classified.overtime_minutes) / Decimal(MINUTES_PER_HOUR)
        if classified.late_minutes > 0:
            late_count += 1
        if classified.undertime_minutes > 0:
            undertime_count += 1
        if classified.overtime_minutes > 0:
            overtime_count += 1

    status = (
        WeeklyAttendanceStatus.INCOMPLETE
        if total_hours < weekly_hours_target
        else WeeklyAttendanceStatus.ON_TRACK
    )

    return AttendanceSummary(
        days_present=len({s.work_date for s in retained}),
        total_hours=total_hours,
        late_count=late_count,
        undertime_count=undertime_count,
        overtime_count=overtime_count,
        status=status,
    )
