"""
Statutory Deduction Engine (``payroll_engines.statutory``).

Responsibility
--------------
Pure calculation functions for the Philippine employee-share statutory
deductions -- SSS (social insurance), PhilHealth (health insurance),
Pag-IBIG (housing fund) and withholding tax -- and their composition into
a period deduction set with net pay.

Architecture position
---------------------
**Engines layer** -- pure functions. No I/O, no clock, no shared state.
Each sub-calculator takes a monthly amount and returns a monthly amount.

Invariants enforced
-------------------
* All numeric inputs and outputs use ``Decimal`` -- NEVER ``float``.
* Bracket tables are ordered, immutable data; bounds are inclusive of the
  bracket ceiling (a salary exactly at a ceiling uses that bracket).
* Contributions are defined on a monthly scale: the period gross is
  extrapolated to ``gross * periods_per_month`` and each monthly amount is
  divided back by ``periods_per_month``. The flat x4 for weekly payroll
  ignores calendar variance (4.33 weeks/month) on purpose.
* ``net_pay`` is not floored at zero.

Failure modes
-------------
* Zero or negative gross pay or periods_per_month -> ``InvalidPayInputError``.

Audit relevance
---------------
The tables below are a frozen snapshot, not a live government schedule.
They are exposed as module constants so they can be compared line by line
with the published schedules.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from payroll_engines.tracer import traced_engine
from payroll_kernel.domain.dtos import DeductionSet
from payroll_kernel.domain.values import to_decimal
from payroll_kernel.exceptions import InvalidPayInputError
from payroll_kernel.logging_config import get_logger

logger = get_logger("engines.statutory")


@dataclass(frozen=True)
class ContributionBracket:
    """Flat contribution for every monthly salary up to ``upper_bound``."""

    upper_bound: Decimal
    contribution: Decimal


@dataclass(frozen=True)
class TaxBracket:
    """
    Progressive tax bracket.

    Tax = ``base_tax + (taxable_income - floor) * rate`` for taxable income
    up to ``ceiling`` (``None`` = unbounded).
    """

    floor: Decimal
    ceiling: Decimal | None
    base_tax: Decimal
    rate: Decimal

    def applies_to(self, taxable_income: Decimal) -> bool:
        return self.ceiling is None or taxable_income <= self.ceiling

    def tax_on(self, taxable_income: Decimal) -> Decimal:
        return self.base_tax + (taxable_income - self.floor) * self.rate


def _bracket(upper_bound: str, contribution: str) -> ContributionBracket:
    return ContributionBracket(Decimal(upper_bound), Decimal(contribution))


# ---------------------------------------------------------------------------
# SSS employee share, by monthly salary credit
# ---------------------------------------------------------------------------

SSS_CONTRIBUTION_TABLE: tuple[ContributionBracket, ...] = (
    _bracket("3250", "135"),
    _bracket("3750", "157.50"),
    _bracket("4250", "180"),
    _bracket("4750", "202.50"),
    _bracket("5250", "225"),
    _bracket("5750", "247.50"),
    _bracket("6250", "270"),
    _bracket("6750", "292.50"),
    _bracket("7250", "315"),
    _bracket("7750", "337.50"),
    _bracket("8250", "360"),
    _bracket("8750", "382.50"),
    _bracket("9250", "405"),
    _bracket("9750", "427.50"),
    _bracket("10250", "450"),
    _bracket("10750", "472.50"),
    _bracket("11250", "495"),
    _bracket("11750", "517.50"),
    _bracket("12250", "540"),
    _bracket("12750", "562.50"),
    _bracket("13250", "585"),
    _bracket("13750", "607.50"),
    _bracket("14250", "630"),
    _bracket("14750", "652.50"),
    _bracket("15250", "675"),
    _bracket("15750", "697.50"),
    _bracket("16250", "720"),
    _bracket("16750", "742.50"),
    _bracket("17250", "765"),
    _bracket("17750", "787.50"),
    _bracket("18250", "810"),
    _bracket("18750", "832.50"),
    _bracket("19250", "855"),
    _bracket("19750", "877.50"),
    _bracket("20250", "900"),
    _bracket("20750", "922.50"),
    _bracket("21750", "967.50"),
    _bracket("22750", "1012.50"),
    _bracket("23750", "1057.50"),
    _bracket("24750", "1102.50"),
)

SSS_MAX_CONTRIBUTION = Decimal("1125")

# ---------------------------------------------------------------------------
# PhilHealth and Pag-IBIG employee share
# ---------------------------------------------------------------------------

PHILHEALTH_RATE = Decimal("0.015")
PHILHEALTH_SALARY_CAP = Decimal("60000")

PAGIBIG_LOW_INCOME_THRESHOLD = Decimal("1500")
PAGIBIG_LOW_RATE = Decimal("0.01")
PAGIBIG_RATE = Decimal("0.02")
PAGIBIG_SALARY_CAP = Decimal("5000")

# ---------------------------------------------------------------------------
# Monthly withholding tax (2023 schedule)
# ---------------------------------------------------------------------------

WITHHOLDING_TAX_BRACKETS: tuple[TaxBracket, ...] = (
    TaxBracket(Decimal("0"), Decimal("20833"), Decimal("0"), Decimal("0")),
    TaxBracket(Decimal("20833"), Decimal("33332"), Decimal("0"), Decimal("0.15")),
    TaxBracket(Decimal("33332"), Decimal("66666"), Decimal("1875"), Decimal("0.20")),
    TaxBracket(Decimal("66666"), Decimal("166666"), Decimal("8541.80"), Decimal("0.25")),
    TaxBracket(Decimal("166666"), Decimal("666666"), Decimal("33541.80"), Decimal("0.30")),
    TaxBracket(Decimal("666666"), None, Decimal("183541.80"), Decimal("0.35")),
)


def calculate_sss_contribution(monthly_salary: Decimal) -> Decimal:
    """
    SSS employee contribution for a monthly salary.

    First bracket whose upper bound is >= salary; above the last bracket
    the maximum contribution applies.
    """
    for bracket in SSS_CONTRIBUTION_TABLE:
        if monthly_salary <= bracket.upper_bound:
            return bracket.contribution
    return SSS_MAX_CONTRIBUTION


def calculate_philhealth_contribution(monthly_salary: Decimal) -> Decimal:
    """PhilHealth employee share: 1.5% of salary, salary capped at 60,000."""
    return min(monthly_salary, PHILHEALTH_SALARY_CAP) * PHILHEALTH_RATE


def calculate_pagibig_contribution(monthly_salary: Decimal) -> Decimal:
    """Pag-IBIG employee share: 2% above 1,500 (else 1%), salary capped at 5,000."""
    rate = PAGIBIG_RATE if monthly_salary > PAGIBIG_LOW_INCOME_THRESHOLD else PAGIBIG_LOW_RATE
    return min(monthly_salary, PAGIBIG_SALARY_CAP) * rate


def calculate_withholding_tax(taxable_income: Decimal) -> Decimal:
    """
    Monthly withholding tax on taxable income (salary net of contributions).

    Income at or below 20,833 is exempt. Bracket ceilings are inclusive.
    """
    for bracket in WITHHOLDING_TAX_BRACKETS:
        if bracket.applies_to(taxable_income):
            return bracket.tax_on(taxable_income)
    raise AssertionError("withholding tax table has no unbounded top bracket")


@traced_engine(
    "statutory", "1.0",
    fingerprint_fields=("gross_period_pay", "periods_per_month"),
)
def calculate_deductions(
    gross_period_pay: Decimal,
    periods_per_month: Decimal = Decimal("4"),
) -> DeductionSet:
    """
    Period share of statutory deductions and the resulting net pay.

    Preconditions:
        - ``gross_period_pay`` > 0 and ``periods_per_month`` > 0.
    Postconditions:
        - ``total_deductions`` is the exact sum of the four deductions.
        - ``net_pay == gross_period_pay - total_deductions`` (may be negative).
    Raises:
        InvalidPayInputError: non-positive gross pay or periods_per_month.
    """
    gross = to_decimal(gross_period_pay, "gross_period_pay")
    periods = to_decimal(periods_per_month, "periods_per_month")
    if gross <= 0:
        logger.error("deductions_invalid_gross_pay", extra={"gross_period_pay": str(gross)})
        raise InvalidPayInputError("gross_period_pay", gross)
    if periods <= 0:
        logger.error("deductions_invalid_periods", extra={"periods_per_month": str(periods)})
        raise InvalidPayInputError("periods_per_month", periods)

    monthly_salary = gross * periods

    monthly_sss = calculate_sss_contribution(monthly_salary)
    monthly_philhealth = calculate_philhealth_contribution(monthly_salary)
    monthly_pagibig = calculate_pagibig_contribution(monthly_salary)
    taxable_income = monthly_salary - (monthly_sss + monthly_philhealth + monthly_pagibig)
    monthly_tax = calculate_withholding_tax(taxable_income)

    sss = monthly_sss / periods
    philhealth = monthly_philhealth / periods
    pagibig = monthly_pagibig / periods
    tax = monthly_tax / periods
    total = sss + philhealth + pagibig + tax

    logger.info(
        "deductions_calculated",
        extra={
            "gross_period_pay": str(gross),
            "estimated_monthly_salary": str(monthly_salary),
            "taxable_income": str(taxable_income),
            "sss": str(sss),
            "philhealth": str(philhealth),
            "pagibig": str(pagibig),
            "tax": str(tax),
            "total_deductions": str(total),
        },
    )

    return DeductionSet(
        sss_deduction=sss,
        philhealth_deduction=philhealth,
        pagibig_deduction=pagibig,
        tax_deduction=tax,
        total_deductions=total,
        net_pay=gross - total,
    )


def deduction_breakdown(deductions: DeductionSet) -> dict[str, Decimal]:
    """Deductions keyed by statutory program, for display and audit."""
    return {
        "sss": deductions.sss_deduction,
        "philhealth": deductions.philhealth_deduction,
        "pagibig": deductions.pagibig_deduction,
        "withholding_tax": deductions.tax_deduction,
    }
