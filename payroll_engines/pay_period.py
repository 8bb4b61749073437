"""
Weekly pay period helpers.

Payroll runs weekly. These functions derive the inclusive seven-day
window for a given day and step between windows. Dates are always passed
in; nothing here reads the clock.
"""

from __future__ import annotations

from datetime import date, timedelta

from payroll_kernel.domain.dtos import PayPeriod

DAYS_PER_WEEK = 7


def week_containing(day: date, week_start: int = 0) -> PayPeriod:
    """
    The seven-day pay period that contains ``day``.

    Args:
        day: Any date inside the wanted week.
        week_start: First weekday of the period, ``0`` = Monday ... ``6`` = Sunday.

    Raises:
        ValueError: If ``week_start`` is not in ``0..6``.
    """
    if not 0 <= week_start < DAYS_PER_WEEK:
        raise ValueError(f"week_start must be in 0..6, got {week_start}")
    back = (day.weekday() - week_start) % DAYS_PER_WEEK
    start = day - timedelta(days=back)
    return PayPeriod(start, start + timedelta(days=DAYS_PER_WEEK - 1))


def offset_week(period: PayPeriod, offset: int) -> PayPeriod:
    """Shift ``period`` by ``offset`` whole weeks (negative moves back)."""
    delta = timedelta(weeks=offset)
    return PayPeriod(period.start + delta, period.end + delta)


def week_number(day: date) -> int:
    """ISO 8601 week number of ``day``."""
    return day.isocalendar().week
