"""
Time Classifier (``payroll_engines.time_classifier``).

Responsibility
--------------
Splits one shift's clock-in/clock-out pair into regular hours and late,
undertime and overtime minutes against a configured schedule, and derives
the attendance status shown for that shift.

Architecture position
---------------------
**Engines layer** -- pure functional core. ZERO I/O, ZERO clock reads.
All times are anchored on the shift's own ``work_date``.

Invariants enforced
-------------------
* Every classified figure is >= 0.
* Late minutes are measured from the expected start once the grace period
  is exceeded (arriving 25 minutes late with a 10 minute grace charges 25).
* Late and undertime are both charged; neither caps the other.
* Regular time never exceeds the standard shift length.

Failure modes
-------------
* ``InvalidTimeFormatError`` -- time_in, time_out or the schedule start is
  not a valid ``HH:MM``.
* ``InvalidShiftWindowError`` -- a punch is missing.
* Zero worked time returns the zero record; it is not an error.
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from payroll_kernel.domain.dtos import AttendanceStatus, ClassifiedShift, Shift
from payroll_kernel.domain.schedule import DEFAULT_SCHEDULE, ScheduleConfig
from payroll_kernel.domain.values import (
    MINUTES_PER_HOUR,
    anchor,
    minutes_between,
    parse_clock_time,
)
from payroll_kernel.exceptions import InvalidShiftWindowError
from payroll_kernel.logging_config import get_logger

logger = get_logger("engines.time_classifier")


def _is_missing(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def classify_shift(
    shift: Shift,
    schedule: ScheduleConfig = DEFAULT_SCHEDULE,
) -> ClassifiedShift:
    """
    Classify the worked minutes of one shift.

    Preconditions:
        - ``shift.time_in`` / ``shift.time_out`` are ``HH:MM`` text or times.
    Postconditions:
        - All fields of the result are >= 0.
        - ``regular_hours * 60 <= schedule.standard_shift_minutes``.
    Raises:
        InvalidTimeFormatError: malformed time of day.
        InvalidShiftWindowError: clock-in or clock-out missing.
    """
    if _is_missing(shift.time_in) or _is_missing(shift.time_out):
        logger.warning(
            "shift_unpaired_punch",
            extra={
                "work_date": shift.work_date.isoformat(),
                "time_in": shift.time_in,
                "time_out": shift.time_out,
                "employee_id": shift.employee_id,
            },
        )
        raise InvalidShiftWindowError(
            shift.work_date, shift.time_in, shift.time_out, shift.employee_id,
        )

    time_in = anchor(shift.work_date, parse_clock_time(shift.time_in))
    time_out = anchor(shift.work_date, parse_clock_time(shift.time_out))
    expected_in = anchor(shift.work_date, schedule.expected_start)

    # Clock-out before clock-in: the shift crossed midnight
    if time_out < time_in:
        time_out += timedelta(days=1)

    grace_end = expected_in + timedelta(minutes=schedule.grace_period_minutes)
    expected_out = expected_in + timedelta(minutes=schedule.expected_day_minutes)

    worked_minutes = minutes_between(time_in, time_out)
    if worked_minutes <= 0:
        logger.debug(
            "shift_zero_worked_time",
            extra={"work_date": shift.work_date.isoformat()},
        )
        return ClassifiedShift.zero()

    late_minutes = minutes_between(expected_in, time_in) if time_in > grace_end else 0
    undertime_minutes = (
        minutes_between(time_out, expected_out) if time_out < expected_out else 0
    )
    overtime_minutes = max(0, minutes_between(expected_out, time_out))

    regular_minutes = max(
        0,
        min(worked_minutes - overtime_minutes, schedule.standard_shift_minutes)
        - late_minutes
        - undertime_minutes,
    )

    result = ClassifiedShift(
        regular_hours=Decimal(regular_minutes) / Decimal(MINUTES_PER_HOUR),
        late_minutes=late_minutes,
        undertime_minutes=undertime_minutes,
        overtime_minutes=overtime_minutes,
    )

    logger.debug(
        "shift_classified",
        extra={
            "work_date": shift.work_date.isoformat(),
            "worked_minutes": worked_minutes,
            "regular_minutes": regular_minutes,
            "late_minutes": late_minutes,
            "undertime_minutes": undertime_minutes,
            "overtime_minutes": overtime_minutes,
        },
    )
    return result


def attendance_status(classified: ClassifiedShift) -> AttendanceStatus:
    """Status badge for a shift: late, then undertime, then overtime, else on time."""
    if classified.late_minutes > 0:
        return AttendanceStatus.LATE
    if classified.undertime_minutes > 0:
        return AttendanceStatus.UNDERTIME
    if classified.overtime_minutes > 0:
        return AttendanceStatus.OVERTIME
    return AttendanceStatus.ON_TIME
