"""
Pytest fixtures for the payroll test suite.

Provides:
- Structured logging configured once per session
- LogContext isolation between tests
- ``captured_logs`` for asserting on emitted JSON log records
- Shift / employee builders shared by engine and service tests
"""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO

import pytest

from payroll_kernel.domain.dtos import Employee, PayPeriod, Shift
from payroll_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

# Monday 2024-01-08 .. Sunday 2024-01-14
WEEK_START = date(2024, 1, 8)
WEEK_END = date(2024, 1, 14)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture payroll_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            compute_salary(...)
            logs = captured_logs()
            assert any(r["message"] == "salary_computation_completed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("payroll_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def week() -> PayPeriod:
    return PayPeriod(WEEK_START, WEEK_END)


@pytest.fixture
def employee() -> Employee:
    return Employee(
        id="E001",
        hourly_rate=Decimal("100"),
        department="Operations",
        first_name="Ana",
        last_name="Cruz",
    )


@pytest.fixture
def full_week_shifts() -> list[Shift]:
    """Five on-time 08:00-16:00 shifts, Monday to Friday."""
    return [
        Shift(date(2024, 1, day), "08:00", "16:00", "E001")
        for day in range(8, 13)
    ]
