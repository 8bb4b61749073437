#!/usr/bin/env python3
"""
Run weekly payroll from a time-clock export and an employee roster.

Reads punches (CSV or XLSX) and a roster YAML, computes every employee's
payroll for the week containing --week-of, and prints the records as JSON
on stdout. Structured logs go to stderr.

Usage:
    python3 scripts/run_payroll.py --punches <file> --employees <roster.yaml> [options]

Examples:
    # Payroll for the week containing 2024-01-10
    python3 scripts/run_payroll.py --punches punches.csv --employees roster.yaml --week-of 2024-01-10

    # One department only, with custom settings and attendance summaries
    python3 scripts/run_payroll.py --punches punches.xlsx --employees roster.yaml \\
        --department Operations --config my_settings.yaml --attendance

    # The week before the one containing 2024-01-10
    python3 scripts/run_payroll.py --punches punches.csv --employees roster.yaml \\
        --week-of 2024-01-10 --week-offset -1
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

import yaml

# Project root on sys.path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute weekly payroll: punches -> hours -> gross -> deductions -> net.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--punches",
        required=True,
        type=Path,
        help="Time-clock export (.csv or .xlsx) with employee_id, date, time_in, time_out.",
    )
    parser.add_argument(
        "--employees",
        required=True,
        type=Path,
        help="Roster YAML with an 'employees' list (id, hourly_rate, department, ...).",
    )
    parser.add_argument(
        "--week-of",
        type=lambda s: date.fromisoformat(s),
        default=None,
        help="Any date in the pay week (YYYY-MM-DD). Default: today.",
    )
    parser.add_argument(
        "--week-start",
        type=int,
        default=0,
        help="First weekday of the pay week, 0=Monday ... 6=Sunday (default: 0).",
    )
    parser.add_argument(
        "--week-offset",
        type=int,
        default=0,
        help="Move the pay week by whole weeks, e.g. -1 for the week before (default: 0).",
    )
    parser.add_argument(
        "--department",
        default=None,
        help="Only pay employees of this department.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Payroll settings YAML (default: payroll_config/sets/default.yaml).",
    )
    parser.add_argument(
        "--sheet",
        default=None,
        help="Worksheet name for XLSX punches (default: active sheet).",
    )
    parser.add_argument(
        "--attendance",
        action="store_true",
        help="Include an attendance summary and per-shift status per employee.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for structured logs on stderr (default: WARNING).",
    )
    return parser.parse_args(argv)


def _shift_rows(shifts, period, schedule) -> list[dict]:
    """Per-shift attendance rows for the period, earliest first."""
    from payroll_engines.time_classifier import attendance_status, classify_shift
    from payroll_engines.week_aggregator import shifts_in_period
    from payroll_kernel.domain.values import format_clock_time, parse_clock_time

    rows = []
    for shift in sorted(shifts_in_period(shifts, period.start, period.end), key=lambda s: s.work_date):
        classified = classify_shift(shift, schedule)
        rows.append({
            "date": shift.work_date.isoformat(),
            "time_in": format_clock_time(parse_clock_time(shift.time_in)),
            "time_out": format_clock_time(parse_clock_time(shift.time_out)),
            "status": attendance_status(classified).value,
            "regular_hours": str(classified.regular_hours),
            "late_minutes": classified.late_minutes,
            "undertime_minutes": classified.undertime_minutes,
            "overtime_minutes": classified.overtime_minutes,
        })
    return rows


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    from payroll_config import get_active_config
    from payroll_engines.pay_period import offset_week, week_containing, week_number
    from payroll_ingestion import read_shifts
    from payroll_ingestion.roster import load_roster
    from payroll_kernel.exceptions import PayrollKernelError
    from payroll_kernel.logging_config import configure_logging
    from payroll_services import compute_attendance, run_payroll

    configure_logging(level=getattr(logging, args.log_level))

    week_of = args.week_of or date.today()
    try:
        settings = get_active_config(args.config)
        period = offset_week(week_containing(week_of, args.week_start), args.week_offset)
        options = {"sheet": args.sheet} if args.sheet else {}
        shifts_by_employee = read_shifts(args.punches, options)
        employees = load_roster(args.employees)
        run = run_payroll(
            employees,
            shifts_by_employee,
            period,
            schedule=settings.schedule,
            policy=settings.policy,
            department=args.department,
        )
        output = {
            "config": {"name": settings.name, "version": settings.version},
            "period": {
                "start": period.start.isoformat(),
                "end": period.end.isoformat(),
                "week_number": week_number(period.start),
            },
            "department": args.department,
            "records": [record.to_dict() for record in run.records],
            "skipped_employee_ids": list(run.skipped_employee_ids),
            "skip_reasons": dict(run.skip_reasons),
            "totals": {
                "gross_pay": str(run.total_gross_pay),
                "total_deductions": str(run.total_deductions),
                "net_pay": str(run.total_net_pay),
            },
        }
        if args.attendance:
            attendance = {}
            for record in run.records:
                shifts = shifts_by_employee[record.employee_id]
                summary = compute_attendance(shifts, period, settings.schedule, settings.policy)
                attendance[record.employee_id] = {
                    "days_present": summary.days_present,
                    "total_hours": str(summary.total_hours),
                    "late_count": summary.late_count,
                    "undertime_count": summary.undertime_count,
                    "overtime_count": summary.overtime_count,
                    "status": summary.status.value,
                    "shifts": _shift_rows(shifts, period, settings.schedule),
                }
            output["attendance"] = attendance
    except (PayrollKernelError, yaml.YAMLError, OSError, KeyError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    json.dump(output, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
