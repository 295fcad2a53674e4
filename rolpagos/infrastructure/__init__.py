"""Infrastructure layer exports."""

from .payroll import InMemoryPayrollRepository, PayrollRepository

__all__ = [
    "InMemoryPayrollRepository",
    "PayrollRepository",
]
