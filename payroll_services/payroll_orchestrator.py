"""
payroll_services.payroll_orchestrator -- Weekly payroll composition.

Responsibility:
    Compose the pure engines into the operations callers actually use:
    one employee's payroll record for a period (``compute_salary``), the
    payroll for a whole roster (``run_payroll``) and an attendance summary
    (``compute_attendance``). All arithmetic lives in the engines; the
    orchestrator adds sequencing, defaults and log context.

Architecture position:
    Services -- composes payroll_engines over payroll_kernel DTOs.
    Holds no state between calls; schedule and policy are passed in (or
    taken from the kernel defaults) on every call.

Invariants enforced:
    - Hours -> gross pay -> deductions, in that order; every intermediate
      figure is carried into the ``PayrollRecord``.
    - Idempotent: identical inputs give identical records. The only side
      effect is log output.
    - Roster order is preserved in ``PayrollRun.records``.

Failure modes:
    - InvalidTimeFormatError / InvalidShiftWindowError from classification.
    - InvalidPayInputError when the period has no paid hours (zero gross)
      or the rate is not positive.
    - ``run_payroll`` skips employees with no shift in the period and
      employees whose shifts earn zero gross pay; every other failure
      propagates and no partial run is returned.

Audit relevance:
    Every record is logged with the run id, employee id and period label
    bound in ``LogContext``, so a payslip can be traced to the
    PAYROLL_ENGINE_TRACE records that produced it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from uuid import uuid4

from payroll_engines.gross_pay import calculate_gross_pay
from payroll_engines.statutory import calculate_deductions
from payroll_engines.week_aggregator import (
    aggregate_weekly_hours,
    shifts_in_period,
    summarize_attendance,
)
from payroll_kernel.domain.dtos import (
    AttendanceSummary,
    Employee,
    PayPeriod,
    PayrollRecord,
    PayrollRun,
    Shift,
)
from payroll_kernel.domain.schedule import (
    DEFAULT_POLICY,
    DEFAULT_SCHEDULE,
    PayrollPolicy,
    ScheduleConfig,
)
from payroll_kernel.exceptions import InvalidPayInputError
from payroll_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.payroll")


def _skip(employee_id: str, reason: str) -> str:
    logger.info(
        "payroll_employee_skipped",
        extra={"employee_id": employee_id, "reason": reason},
    )
    return reason


def compute_salary(
    shifts: Sequence[Shift],
    employee: Employee,
    period: PayPeriod,
    schedule: ScheduleConfig | None = None,
    policy: PayrollPolicy | None = None,
) -> PayrollRecord:
    """
    Payroll record for one employee over one pay period.

    ``None`` schedule / policy fall back to ``DEFAULT_SCHEDULE`` /
    ``DEFAULT_POLICY``.

    Raises:
        InvalidTimeFormatError: A shift time is malformed.
        InvalidShiftWindowError: A shift is missing a punch.
        InvalidPayInputError: The period yields zero gross pay.
    """
    schedule = schedule or DEFAULT_SCHEDULE
    policy = policy or DEFAULT_POLICY

    with LogContext.bind(employee_id=employee.id, period=period.label):
        logger.info(
            "salary_computation_started",
            extra={"shift_count": len(shifts), "hourly_rate": str(employee.hourly_rate)},
        )

        hours = aggregate_weekly_hours(shifts, schedule, period.start, period.end)
        pay = calculate_gross_pay(hours, employee.hourly_rate, policy.overtime_multiplier)
        deductions = calculate_deductions(pay.gross_pay, policy.periods_per_month)

        record = PayrollRecord(
            employee_id=employee.id,
            period_start=period.start,
            period_end=period.end,
            regular_hours=hours.regular_hours,
            overtime_hours=hours.overtime_hours,
            total_hours=hours.total_hours,
            late_minutes=hours.late_minutes,
            undertime_minutes=hours.undertime_minutes,
            regular_pay=pay.regular_pay,
            overtime_pay=pay.overtime_pay,
            gross_pay=pay.gross_pay,
            sss_deduction=deductions.sss_deduction,
            philhealth_deduction=deductions.philhealth_deduction,
            pagibig_deduction=deductions.pagibig_deduction,
            tax_deduction=deductions.tax_deduction,
            total_deductions=deductions.total_deductions,
            net_pay=deductions.net_pay,
        )

        logger.info(
            "salary_computation_completed",
            extra={
                "total_hours": str(record.total_hours),
                "gross_pay": str(record.gross_pay),
                "total_deductions": str(record.total_deductions),
                "net_pay": str(record.net_pay),
            },
        )
    return record


def run_payroll(
    employees: Sequence[Employee],
    shifts_by_employee: Mapping[str, Sequence[Shift]],
    period: PayPeriod,
    schedule: ScheduleConfig | None = None,
    policy: PayrollPolicy | None = None,
    department: str | None = None,
) -> PayrollRun:
    """
    Payroll for every employee on the roster, in roster order.

    When ``department`` is given only employees of that department are
    paid. Employees with no shift inside the period, or whose shifts earn
    no paid time, are skipped and listed in ``PayrollRun.skipped_employee_ids``
    with the reason in ``PayrollRun.skip_reasons``.
    """
    with LogContext.bind(run_id=str(uuid4()), period=period.label):
        roster = [
            e for e in employees
            if department is None or e.department == department
        ]
        logger.info(
            "payroll_run_started",
            extra={"employee_count": len(roster), "department": department},
        )

        records: list[PayrollRecord] = []
        skipped: dict[str, str] = {}
        for employee in roster:
            shifts = shifts_by_employee.get(employee.id, ())
            if not shifts_in_period(shifts, period.start, period.end):
                skipped[employee.id] = _skip(employee.id, "no_shifts_in_period")
                continue
            try:
                records.append(compute_salary(shifts, employee, period, schedule, policy))
            except InvalidPayInputError as exc:
                # Shifts that classify to no paid time leave nothing to deduct from
                if exc.field != "gross_period_pay":
                    raise
                skipped[employee.id] = _skip(employee.id, "zero_gross_pay")

        run = PayrollRun(
            period=period,
            records=tuple(records),
            skipped_employee_ids=tuple(skipped),
            skip_reasons=skipped,
            department=department,
        )

        logger.info(
            "payroll_run_completed",
            extra={
                "paid_count": len(run.records),
                "skipped_count": len(run.skipped_employee_ids),
                "total_gross_pay": str(run.total_gross_pay),
                "total_net_pay": str(run.total_net_pay),
            },
        )
    return run


def compute_attendance(
    shifts: Sequence[Shift],
    period: PayPeriod,
    schedule: ScheduleConfig | None = None,
    policy: PayrollPolicy | None = None,
) -> AttendanceSummary:
    """Attendance summary for one employee, judged against the policy's weekly target."""
    policy = policy or DEFAULT_POLICY
    return summarize_attendance(
        shifts,
        schedule or DEFAULT_SCHEDULE,
        period.start,
        period.end,
        weekly_hours_target=policy.weekly_hours_target,
    )
