"""
Tests for the payroll orchestrator.

Covers:
- compute_salary end to end: hours -> gross -> deductions -> net
- Defaults for schedule and policy
- Zero-gross periods
- run_payroll roster order, department filter and skipped employees
- compute_attendance against the policy target
- Log context binding
"""

from datetime import date
from decimal import Decimal

import pytest

from payroll_kernel.domain.dtos import Employee, Shift, WeeklyAttendanceStatus
from payroll_kernel.domain.schedule import PayrollPolicy, ScheduleConfig
from payroll_kernel.exceptions import InvalidPayInputError, InvalidShiftWindowError
from payroll_services import compute_attendance, compute_salary, run_payroll


def _shift(day: int, time_in="08:00", time_out="16:00", employee_id="E001") -> Shift:
    return Shift(date(2024, 1, day), time_in, time_out, employee_id)


def _employee(employee_id: str, rate: str = "100", department: str = "Operations") -> Employee:
    return Employee(id=employee_id, hourly_rate=Decimal(rate), department=department)


class TestComputeSalary:
    """Single employee, single period."""

    def test_full_week(self, full_week_shifts, employee, week):
        record = compute_salary(full_week_shifts, employee, week)

        assert record.employee_id == "E001"
        assert record.period_start == week.start
        assert record.period_end == week.end
        assert record.regular_hours == Decimal("40")
        assert record.overtime_hours == Decimal("0")
        assert record.gross_pay == Decimal("4000")
        assert record.sss_deduction == Decimal("180")
        assert record.philhealth_deduction == Decimal("60")
        assert record.pagibig_deduction == Decimal("25")
        assert record.tax_deduction == Decimal("0")
        assert record.total_deductions == Decimal("265")
        assert record.net_pay == Decimal("3735")

    def test_overtime_paid_at_premium(self, employee, week):
        shifts = [_shift(8, "08:00", "18:00"), _shift(9), _shift(10), _shift(11), _shift(12)]
        record = compute_salary(shifts, employee, week)

        assert record.overtime_hours == Decimal("2")
        assert record.overtime_pay == Decimal("250")
        assert record.gross_pay == Decimal("4250")

    def test_custom_policy(self, full_week_shifts, employee, week):
        policy = PayrollPolicy(overtime_multiplier=Decimal("1.5"), periods_per_month=Decimal("2"))
        record = compute_salary(full_week_shifts, employee, week, policy=policy)

        # Monthly estimate 8000 -> SSS 360, PhilHealth 120, Pag-IBIG 100, halved
        assert record.sss_deduction == Decimal("180")
        assert record.philhealth_deduction == Decimal("60")
        assert record.pagibig_deduction == Decimal("50")

    def test_meal_break_schedule(self, week):
        schedule = ScheduleConfig(meal_break_minutes=60)
        employee = _employee("E001", "60")
        shifts = [_shift(8, "08:05", "17:00"), _shift(9, "08:25", "16:30")]
        record = compute_salary(shifts, employee, week, schedule=schedule)

        assert record.regular_hours == Decimal("8") + Decimal(425) / Decimal(60)
        assert record.late_minutes == 25
        assert record.undertime_minutes == 30
        assert record.overtime_hours == Decimal("0")

    def test_shifts_outside_period_ignored(self, full_week_shifts, employee, week):
        extra = full_week_shifts + [_shift(15)]

        assert compute_salary(extra, employee, week) == compute_salary(full_week_shifts, employee, week)

    def test_idempotent(self, full_week_shifts, employee, week):
        first = compute_salary(full_week_shifts, employee, week)
        second = compute_salary(full_week_shifts, employee, week)

        assert first == second

    def test_zero_gross_rejected(self, employee, week):
        with pytest.raises(InvalidPayInputError) as exc_info:
            compute_salary([_shift(8, "08:00", "08:00")], employee, week)

        assert exc_info.value.field == "gross_period_pay"

    def test_unpaired_punch_propagates(self, employee, week):
        with pytest.raises(InvalidShiftWindowError):
            compute_salary([_shift(8, "08:00", None)], employee, week)

    def test_log_context_bound(self, captured_logs, full_week_shifts, employee, week):
        compute_salary(full_week_shifts, employee, week)

        completed = [r for r in captured_logs() if r["message"] == "salary_computation_completed"]
        assert completed[0]["employee_id"] == "E001"
        assert completed[0]["period"] == "2024-01-08/2024-01-14"
        assert Decimal(completed[0]["net_pay"]) == Decimal("3735")


class TestRunPayroll:
    """Roster-level payroll."""

    def _roster(self) -> list[Employee]:
        return [
            _employee("E003", "120", department="Sales"),
            _employee("E001"),
            _employee("E002"),
        ]

    def _shifts(self) -> dict[str, list[Shift]]:
        return {
            "E001": [_shift(d) for d in range(8, 13)],
            "E003": [_shift(d, employee_id="E003") for d in range(8, 11)],
            "E002": [_shift(20, employee_id="E002")],
        }

    def test_roster_order_and_skips(self, week):
        run = run_payroll(self._roster(), self._shifts(), week)

        assert [r.employee_id for r in run.records] == ["E003", "E001"]
        assert run.skipped_employee_ids == ("E002",)
        assert run.department is None

    def test_department_filter(self, week):
        run = run_payroll(self._roster(), self._shifts(), week, department="Operations")

        assert [r.employee_id for r in run.records] == ["E001"]
        assert run.skipped_employee_ids == ("E002",)
        assert run.department == "Operations"

    def test_employee_without_shift_entry_skipped(self, week):
        run = run_payroll([_employee("E009")], self._shifts(), week)

        assert run.records == ()
        assert run.skipped_employee_ids == ("E009",)
        assert run.skip_reasons == {"E009": "no_shifts_in_period"}

    def test_zero_paid_time_skipped_without_aborting_run(self, captured_logs, week):
        roster = [_employee("E001"), _employee("E002"), _employee("E004")]
        shifts = {
            "E001": [_shift(8)],
            "E002": [_shift(8, "15:55", "16:00", employee_id="E002")],
            "E004": [_shift(9, "08:00", "08:00", employee_id="E004")],
        }

        run = run_payroll(roster, shifts, week)

        assert [r.employee_id for r in run.records] == ["E001"]
        assert run.skipped_employee_ids == ("E002", "E004")
        assert run.skip_reasons == {"E002": "zero_gross_pay", "E004": "zero_gross_pay"}
        skips = [r for r in captured_logs() if r["message"] == "payroll_employee_skipped"]
        assert [s["reason"] for s in skips] == ["zero_gross_pay", "zero_gross_pay"]

    def test_totals(self, week):
        run = run_payroll(self._roster(), self._shifts(), week)

        assert run.total_gross_pay == sum(r.gross_pay for r in run.records)
        assert run.total_net_pay == run.total_gross_pay - run.total_deductions

    def test_failure_propagates(self, week):
        shifts = self._shifts()
        shifts["E001"] = [_shift(8, "08:00", None)]

        with pytest.raises(InvalidShiftWindowError):
            run_payroll(self._roster(), shifts, week)

    def test_run_id_in_logs(self, captured_logs, week):
        run_payroll(self._roster(), self._shifts(), week)

        logs = captured_logs()
        started = next(r for r in logs if r["message"] == "payroll_run_started")
        completed = next(r for r in logs if r["message"] == "salary_computation_completed")
        assert started["run_id"]
        assert completed["run_id"] == started["run_id"]


class TestComputeAttendance:
    def test_uses_policy_target(self, week):
        shifts = [_shift(d) for d in range(8, 12)]

        default = compute_attendance(shifts, week)
        lenient = compute_attendance(shifts, week, policy=PayrollPolicy(weekly_hours_target=Decimal("32")))

        assert default.status == WeeklyAttendanceStatus.INCOMPLETE
        assert lenient.status == WeeklyAttendanceStatus.ON_TRACK
        assert lenient.days_present == 4
