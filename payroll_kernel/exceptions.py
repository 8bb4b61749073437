"""
Typed Exception Hierarchy for the Payroll Kernel.

Every failure the engines can report is an expected, caller-recoverable
input-validation failure. Callers catch by type, read the machine-readable
``code`` class attribute, and use the structured attributes instead of
parsing messages:

    try:
        record = compute_salary(shifts, employee, period)
    except InvalidTimeFormatError as e:
        reject_punch(e.value)
    except PayrollKernelError as e:
        log.error("payroll failed", extra={"code": e.code})

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    PayrollKernelError (base)
    |
    +-- TimeError
    |   +-- InvalidTimeFormatError
    |   +-- InvalidShiftWindowError
    |
    +-- PayError
    |   +-- InvalidPayInputError
    |
    +-- PeriodError
    |   +-- InvalidPayPeriodError
    |
    +-- IngestionError
        +-- PunchImportError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category   | Code                  | When Raised
-----------|-----------------------|--------------------------------------------
Time       | INVALID_TIME_FORMAT   | Time of day is not HH:MM or out of range
           | INVALID_SHIFT_WINDOW  | Punch missing; worked window unreconcilable
-----------|-----------------------|--------------------------------------------
Pay        | INVALID_PAY_INPUT     | Rate, gross pay or divisor is not positive
-----------|-----------------------|--------------------------------------------
Period     | INVALID_PAY_PERIOD    | Period end precedes period start
-----------|-----------------------|--------------------------------------------
Ingestion  | PUNCH_IMPORT_ERROR    | Punch row unusable or file type unsupported
"""

from __future__ import annotations

from datetime import date
from typing import Any


class PayrollKernelError(Exception):
    """
    Base exception for all payroll kernel errors.

    All subclasses carry a ``code`` class attribute for machine-readable
    error identification.
    """

    code: str = "PAYROLL_KERNEL_ERROR"


# Time-related exceptions


class TimeError(PayrollKernelError):
    """Base exception for time-of-day and shift window errors."""

    code: str = "TIME_ERROR"


class InvalidTimeFormatError(TimeError):
    """Time of day is unparseable or outside 00:00-23:59."""

    code: str = "INVALID_TIME_FORMAT"

    def __init__(self, value: Any, reason: str = "expected 24-hour HH:MM"):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid time of day {value!r}: {reason}")


class InvalidShiftWindowError(TimeError):
    """
    The worked window of a shift cannot be reconciled.

    Raised for unpaired punches (clock-in or clock-out missing), where no
    midnight-crossing correction can produce a duration.
    """

    code: str = "INVALID_SHIFT_WINDOW"

    def __init__(
        self,
        work_date: date,
        time_in: Any,
        time_out: Any,
        employee_id: str | None = None,
    ):
        self.work_date = work_date
        self.time_in = time_in
        self.time_out = time_out
        self.employee_id = employee_id
        super().__init__(
            f"Shift on {work_date} has no reconcilable window "
            f"(time_in={time_in!r}, time_out={time_out!r})"
        )


# Pay-related exceptions


class PayError(PayrollKernelError):
    """Base exception for pay computation errors."""

    code: str = "PAY_ERROR"


class InvalidPayInputError(PayError):
    """A rate, gross pay or divisor fed into pay math is not positive."""

    code: str = "INVALID_PAY_INPUT"

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"{field} must be positive, got {value}")


# Period-related exceptions


class PeriodError(PayrollKernelError):
    """Base exception for pay period errors."""

    code: str = "PERIOD_ERROR"


class InvalidPayPeriodError(PeriodError):
    """Pay period end date precedes its start date."""

    code: str = "INVALID_PAY_PERIOD"

    def __init__(self, start: date, end: date):
        self.start = start
        self.end = end
        super().__init__(f"Pay period end {end} precedes start {start}")


# Ingestion exceptions


class IngestionError(PayrollKernelError):
    """Base exception for punch import errors."""

    code: str = "INGESTION_ERROR"


class PunchImportError(IngestionError):
    """A punch row (or the file holding it) cannot be turned into shifts."""

    code: str = "PUNCH_IMPORT_ERROR"

    def __init__(self, message: str, row_number: int | None = None):
        self.row_number = row_number
        if row_number is not None:
            message = f"Row {row_number}: {message}"
        super().__init__(message)
