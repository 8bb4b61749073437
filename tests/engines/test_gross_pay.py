"""Tests for the Gross Pay Calculator."""

from decimal import Decimal

import pytest

from payroll_engines.gross_pay import calculate_gross_pay
from payroll_kernel.domain.dtos import WeeklyHours
from payroll_kernel.exceptions import InvalidPayInputError


def _hours(regular: str, overtime: str = "0") -> WeeklyHours:
    r, o = Decimal(regular), Decimal(overtime)
    return WeeklyHours(regular_hours=r, overtime_hours=o, total_hours=r + o)


class TestCalculateGrossPay:
    def test_regular_only(self):
        pay = calculate_gross_pay(_hours("40"), Decimal("100"))

        assert pay.regular_pay == Decimal("4000")
        assert pay.overtime_pay == Decimal("0")
        assert pay.gross_pay == Decimal("4000")

    def test_overtime_at_default_premium(self):
        pay = calculate_gross_pay(_hours("40", "2"), Decimal("100"))

        assert pay.overtime_pay == Decimal("250")
        assert pay.gross_pay == Decimal("4250")

    def test_custom_multiplier(self):
        pay = calculate_gross_pay(_hours("8", "1"), Decimal("80"), Decimal("1.5"))

        assert pay.overtime_pay == Decimal("120")
        assert pay.gross_pay == Decimal("760")

    def test_no_rounding_applied(self):
        pay = calculate_gross_pay(_hours("7.5"), Decimal("83.33"))

        assert pay.regular_pay == Decimal("624.975")

    def test_numeric_rate_coerced(self):
        pay = calculate_gross_pay(_hours("10"), 100.5)

        assert pay.regular_pay == Decimal("1005.0")

    def test_zero_hours(self):
        pay = calculate_gross_pay(WeeklyHours.zero(), Decimal("100"))

        assert pay.gross_pay == Decimal("0")

    @pytest.mark.parametrize("rate", [Decimal("0"), Decimal("-1")])
    def test_non_positive_rate_rejected(self, rate):
        with pytest.raises(InvalidPayInputError) as exc_info:
            calculate_gross_pay(_hours("40"), rate)

        assert exc_info.value.field == "hourly_rate"

    def test_non_positive_multiplier_rejected(self):
        with pytest.raises(InvalidPayInputError) as exc_info:
            calculate_gross_pay(_hours("40"), Decimal("100"), Decimal("0"))

        assert exc_info.value.field == "overtime_multiplier"

    def test_higher_rate_pays_more(self):
        low = calculate_gross_pay(_hours("40", "3"), Decimal("100"))
        high = calculate_gross_pay(_hours("40", "3"), Decimal("100.01"))

        assert high.gross_pay > low.gross_pay
