"""
payroll_services -- Payroll composition over the pure engines.

Usage:
    from payroll_services import compute_salary, run_payroll
"""

from payroll_services.payroll_orchestrator import (
    compute_attendance,
    compute_salary,
    run_payroll,
)

__all__ = [
    "compute_attendance",
    "compute_salary",
    "run_payroll",
]
