"""
Module: payroll_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines. This is the import surface for payroll_services
    and the command-line scripts.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import payroll_kernel (domain values, DTOs, exceptions,
    logging) and sibling engine modules.
    MUST NOT import payroll_services, payroll_config or payroll_ingestion.

Invariants enforced:
    - Purity: engines never call ``datetime.now()`` or ``date.today()``.
      Work dates and pay periods are passed in by the caller.
    - Decimal-only arithmetic for hours and money; ``to_decimal`` turns
      any float input into ``Decimal`` through ``str`` before it is used.
    - Determinism: identical inputs always produce identical outputs.

Failure modes:
    - InvalidTimeFormatError / InvalidShiftWindowError from the classifier.
    - InvalidPayInputError from gross pay and deductions.
    - InvalidPayPeriodError from period construction.

Audit relevance:
    Aggregation, gross pay and deduction calls are traced via
    ``@traced_engine`` (see ``payroll_engines.tracer``), emitting
    PAYROLL_ENGINE_TRACE records with engine name, version, input
    fingerprint and duration.

Usage:
    from payroll_engines import aggregate_weekly_hours, calculate_gross_pay
    from payroll_engines.statutory import calculate_deductions
"""

from payroll_kernel.logging_config import get_logger

logger = get_logger("engines")

from payroll_engines.gross_pay import DEFAULT_OVERTIME_MULTIPLIER, calculate_gross_pay
from payroll_engines.pay_period import offset_week, week_containing, week_number
from payroll_engines.statutory import (
    SSS_CONTRIBUTION_TABLE,
    SSS_MAX_CONTRIBUTION,
    WITHHOLDING_TAX_BRACKETS,
    ContributionBracket,
    TaxBracket,
    calculate_deductions,
    calculate_pagibig_contribution,
    calculate_philhealth_contribution,
    calculate_sss_contribution,
    calculate_withholding_tax,
    deduction_breakdown,
)
from payroll_engines.time_classifier import attendance_status, classify_shift
from payroll_engines.tracer import traced_engine
from payroll_engines.week_aggregator import (
    aggregate_weekly_hours,
    shifts_in_period,
    summarize_attendance,
)

__all__ = [
    # Time classification
    "classify_shift",
    "attendance_status",
    # Aggregation
    "aggregate_weekly_hours",
    "shifts_in_period",
    "summarize_attendance",
    # Gross pay
    "calculate_gross_pay",
    "DEFAULT_OVERTIME_MULTIPLIER",
    # Statutory deductions
    "calculate_deductions",
    "calculate_sss_contribution",
    "calculate_philhealth_contribution",
    "calculate_pagibig_contribution",
    "calculate_withholding_tax",
    "deduction_breakdown",
    "ContributionBracket",
    "TaxBracket",
    "SSS_CONTRIBUTION_TABLE",
    "SSS_MAX_CONTRIBUTION",
    "WITHHOLDING_TAX_BRACKETS",
    # Pay periods
    "week_containing",
    "offset_week",
    "week_number",
    # Tracing
    "traced_engine",
]
