"""
Values -- Primitive conversions shared by every payroll computation.

Responsibility:
    Parses wall-clock times of day and normalizes numeric inputs to
    ``Decimal``. Every engine funnels raw caller input through here, so a
    malformed time or a float amount is caught at one boundary.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Times of day are 24-hour ``HH:MM`` with hour 0-23 and minute 0-59.
    - Amounts are ``Decimal``; floats are converted through ``str`` so the
      value the caller sees is the value computed with.

Failure modes:
    - InvalidTimeFormatError for unparseable or out-of-range times.
    - ValueError for amounts that are not numeric.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any

from payroll_kernel.exceptions import InvalidTimeFormatError

MINUTES_PER_HOUR = 60
ZERO = Decimal("0")

_CLOCK_PATTERN = re.compile(r"^([0-9]{1,2}):([0-9]{2})$")


def parse_clock_time(value: str | time) -> time:
    """
    Parse a 24-hour ``HH:MM`` wall-clock time.

    ``datetime.time`` values pass through with seconds dropped.

    Raises:
        InvalidTimeFormatError: If the text is not ``HH:MM`` or the hour or
            minute is out of range.
    """
    if isinstance(value, datetime):
        return value.time().replace(second=0, microsecond=0)
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    if not isinstance(value, str):
        raise InvalidTimeFormatError(value, "expected text or time value")

    match = _CLOCK_PATTERN.match(value.strip())
    if match is None:
        raise InvalidTimeFormatError(value)

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23:
        raise InvalidTimeFormatError(value, "hour must be 0-23")
    if minute > 59:
        raise InvalidTimeFormatError(value, "minute must be 0-59")
    return time(hour, minute)


def anchor(day: date, clock: time) -> datetime:
    """Place a wall-clock time on a calendar day."""
    return datetime.combine(day, clock)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from ``start`` to ``end`` (negative if end is earlier)."""
    return int((end - start) / timedelta(minutes=1))


def format_clock_time(clock: time) -> str:
    """Render a time of day as ``HH:MM``."""
    return f"{clock.hour:02d}:{clock.minute:02d}"


def to_decimal(value: Any, field: str = "value") -> Decimal:
    """
    Convert a numeric input to ``Decimal``.

    Floats go through ``str`` so ``0.1`` stays ``Decimal("0.1")``.

    Raises:
        ValueError: If the value is a bool, non-numeric, or not finite.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValueError(f"{field} must be numeric, got {value!r}")
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"{field} must be numeric, got {value!r}") from e
    else:
        raise ValueError(f"{field} must be numeric, got {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"{field} must be finite, got {value!r}")
    return result
