"""
Payroll Kernel

Shared foundation for the attendance and payroll engines:
- Structured JSON logging
- Typed exception hierarchy with machine-readable codes
- Immutable domain value objects (shifts, schedules, pay results)
"""

__version__ = "0.1.0"
