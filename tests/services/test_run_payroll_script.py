"""End-to-end tests for scripts/run_payroll.py."""

import json
from decimal import Decimal
from pathlib import Path

import openpyxl

from scripts.run_payroll import main

PUNCHES = (
    "Employee ID,Date,Time In,Time Out\n"
    "E001,2024-01-08,08:00,16:00\n"
    "E001,2024-01-09,08:00,16:00\n"
    "E001,2024-01-10,08:00,16:00\n"
    "E001,2024-01-11,08:00,16:00\n"
    "E001,2024-01-12,08:00,16:00\n"
    "E002,2024-01-08,08:00,18:00\n"
)

ROSTER = """
employees:
  - id: E001
    hourly_rate: "100"
    department: Operations
  - id: E002
    hourly_rate: "80"
    department: Sales
  - id: E003
    hourly_rate: "90"
    department: Operations
"""


def _inputs(tmp_path: Path) -> list[str]:
    punches = tmp_path / "punches.csv"
    punches.write_text(PUNCHES)
    roster = tmp_path / "roster.yaml"
    roster.write_text(ROSTER)
    return ["--punches", str(punches), "--employees", str(roster), "--week-of", "2024-01-10"]


class TestRunPayrollScript:
    def test_prints_records(self, tmp_path, capsys):
        assert main(_inputs(tmp_path)) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["period"] == {"start": "2024-01-08", "end": "2024-01-14", "week_number": 2}
        assert output["skip_reasons"] == {"E003": "no_shifts_in_period"}
        assert [r["employee_id"] for r in output["records"]] == ["E001", "E002"]
        assert output["skipped_employee_ids"] == ["E003"]
        assert Decimal(output["records"][0]["net_pay"]) == Decimal("3735")
        assert output["config"]["name"] == "default"

    def test_department_and_attendance(self, tmp_path, capsys):
        assert main(_inputs(tmp_path) + ["--department", "Operations", "--attendance"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert [r["employee_id"] for r in output["records"]] == ["E001"]
        assert output["attendance"]["E001"]["days_present"] == 5
        assert output["attendance"]["E001"]["status"] == "on_track"
        shifts = output["attendance"]["E001"]["shifts"]
        assert [s["date"] for s in shifts] == [
            "2024-01-08", "2024-01-09", "2024-01-10", "2024-01-11", "2024-01-12",
        ]
        assert shifts[0]["time_in"] == "08:00"
        assert {s["status"] for s in shifts} == {"on_time"}

    def test_overtime_shift_status(self, tmp_path, capsys):
        assert main(_inputs(tmp_path) + ["--attendance"]) == 0

        output = json.loads(capsys.readouterr().out)
        (shift,) = output["attendance"]["E002"]["shifts"]
        assert shift["status"] == "overtime"
        assert shift["overtime_minutes"] == 120

    def test_week_offset_and_number(self, tmp_path, capsys):
        assert main(_inputs(tmp_path) + ["--week-offset", "-1"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["period"] == {"start": "2024-01-01", "end": "2024-01-07", "week_number": 1}
        assert output["records"] == []
        assert output["skipped_employee_ids"] == ["E001", "E002", "E003"]

    def test_zero_paid_time_employee_skipped(self, tmp_path, capsys):
        args = _inputs(tmp_path)
        punches = tmp_path / "punches.csv"
        punches.write_text(PUNCHES + "E003,2024-01-08,15:55,16:00\n")

        assert main(args) == 0

        output = json.loads(capsys.readouterr().out)
        assert [r["employee_id"] for r in output["records"]] == ["E001", "E002"]
        assert output["skip_reasons"] == {"E003": "zero_gross_pay"}

    def test_import_error_reported(self, tmp_path, capsys):
        args = _inputs(tmp_path)
        bad = tmp_path / "punches.txt"
        bad.write_text("nothing")
        args[1] = str(bad)

        assert main(args) == 1
        assert "Unsupported" in capsys.readouterr().err

    def test_malformed_roster_yaml_reported(self, tmp_path, capsys):
        args = _inputs(tmp_path)
        (tmp_path / "roster.yaml").write_text("employees: [\n  - id: E001\n")

        assert main(args) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_missing_xlsx_sheet_reported(self, tmp_path, capsys):
        wb = openpyxl.Workbook()
        wb.active.append(["employee_id", "date", "time_in", "time_out"])
        book = tmp_path / "punches.xlsx"
        wb.save(book)
        args = _inputs(tmp_path)
        args[1] = str(book)

        assert main(args + ["--sheet", "Week 9"]) == 1
        assert "Week 9" in capsys.readouterr().err
