"""
Schedule and payroll policy configuration values.

Both are frozen dataclasses validated at construction. The module-level
defaults are immutable instances; callers that need a different policy
build their own instance and pass it per call.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from decimal import Decimal

from payroll_kernel.domain.values import parse_clock_time, to_decimal
from payroll_kernel.logging_config import get_logger

logger = get_logger("domain.schedule")


@dataclass(frozen=True)
class ScheduleConfig:
    """
    Expected working day used to classify a shift.

    ``meal_break_minutes`` is unpaid time inside the day: it pushes the
    expected clock-out later without adding to the standard shift length.
    With the defaults the expected day is 08:00-16:00.
    """

    expected_time_in: str = "08:00"
    grace_period_minutes: int = 10
    standard_shift_minutes: int = 480
    meal_break_minutes: int = 0

    def __post_init__(self) -> None:
        # Raises InvalidTimeFormatError for a malformed start time
        parse_clock_time(self.expected_time_in)
        if self.grace_period_minutes < 0:
            raise ValueError("grace_period_minutes cannot be negative")
        if self.standard_shift_minutes <= 0:
            raise ValueError("standard_shift_minutes must be positive")
        if self.meal_break_minutes < 0:
            raise ValueError("meal_break_minutes cannot be negative")

    @property
    def expected_start(self) -> time:
        """Expected clock-in as a time of day."""
        return parse_clock_time(self.expected_time_in)

    @property
    def expected_day_minutes(self) -> int:
        """Minutes from expected clock-in to expected clock-out."""
        return self.standard_shift_minutes + self.meal_break_minutes


@dataclass(frozen=True)
class PayrollPolicy:
    """
    Pay policy applied on top of classified hours.

    ``periods_per_month`` drives the monthly extrapolation of statutory
    contributions (flat x4 for weekly payroll, ignoring 4.33 weeks/month).
    """

    overtime_multiplier: Decimal = Decimal("1.25")
    periods_per_month: Decimal = Decimal("4")
    weekly_hours_target: Decimal = Decimal("35")

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "overtime_multiplier",
            to_decimal(self.overtime_multiplier, "overtime_multiplier"),
        )
        object.__setattr__(
            self, "periods_per_month",
            to_decimal(self.periods_per_month, "periods_per_month"),
        )
        object.__setattr__(
            self, "weekly_hours_target",
            to_decimal(self.weekly_hours_target, "weekly_hours_target"),
        )
        if self.overtime_multiplier <= 0:
            raise ValueError("overtime_multiplier must be positive")
        if self.periods_per_month <= 0:
            raise ValueError("periods_per_month must be positive")
        if self.weekly_hours_target < 0:
            raise ValueError("weekly_hours_target cannot be negative")

        logger.debug(
            "payroll_policy_initialized",
            extra={
                "overtime_multiplier": str(self.overtime_multiplier),
                "periods_per_month": str(self.periods_per_month),
                "weekly_hours_target": str(self.weekly_hours_target),
            },
        )


DEFAULT_SCHEDULE = ScheduleConfig()
DEFAULT_POLICY = PayrollPolicy()
