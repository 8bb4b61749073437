"""
Gross Pay Calculator (``payroll_engines.gross_pay``).

Converts aggregated hours and an hourly rate into regular pay, overtime
pay and gross pay. A single flat overtime premium applies; holiday and
night differentials are not modeled.

Pure function, Decimal-only, no rounding: amounts are carried at full
precision so that deductions and net pay reproduce exactly.
"""

from __future__ import annotations

from decimal import Decimal

from payroll_engines.tracer import traced_engine
from payroll_kernel.domain.dtos import PayComponents, WeeklyHours
from payroll_kernel.domain.values import to_decimal
from payroll_kernel.exceptions import InvalidPayInputError
from payroll_kernel.logging_config import get_logger

logger = get_logger("engines.gross_pay")

DEFAULT_OVERTIME_MULTIPLIER = Decimal("1.25")


@traced_engine(
    "gross_pay", "1.0",
    fingerprint_fields=("hours", "hourly_rate", "overtime_multiplier"),
)
def calculate_gross_pay(
    hours: WeeklyHours,
    hourly_rate: Decimal,
    overtime_multiplier: Decimal = DEFAULT_OVERTIME_MULTIPLIER,
) -> PayComponents:
    """
    Calculate gross pay for a period.

    ``regular_pay = regular_hours * rate``;
    ``overtime_pay = overtime_hours * rate * overtime_multiplier``.

    Raises:
        InvalidPayInputError: If ``hourly_rate`` or ``overtime_multiplier``
            is not positive.
    """
    rate = to_decimal(hourly_rate, "hourly_rate")
    multiplier = to_decimal(overtime_multiplier, "overtime_multiplier")
    if rate <= 0:
        logger.error("gross_pay_invalid_rate", extra={"hourly_rate": str(rate)})
        raise InvalidPayInputError("hourly_rate", rate)
    if multiplier <= 0:
        logger.error(
            "gross_pay_invalid_multiplier",
            extra={"overtime_multiplier": str(multiplier)},
        )
        raise InvalidPayInputError("overtime_multiplier", multiplier)

    regular_pay = hours.regular_hours * rate
    overtime_pay = hours.overtime_hours * rate * multiplier

    return PayComponents(
        regular_pay=regular_pay,
        overtime_pay=overtime_pay,
        gross_pay=regular_pay + overtime_pay,
    )
