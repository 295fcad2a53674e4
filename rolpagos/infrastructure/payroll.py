"""Infrastructure layer for payroll state persistence."""
from __future__ import annotations

from typing import Protocol

from rolpagos.core.schema import Employee, PayrollRow, PeriodConfig
from rolpagos.domain import PayrollState


class PayrollRepository(Protocol):
    """Persistence contract for the employee directory and the payroll roll."""

    def get_period(self) -> PeriodConfig: ...

    def save_period(self, period: PeriodConfig) -> None: ...

    def next_employee_id(self) -> str: ...

    def list_employees(self) -> list[Employee]: ...

    def get_employee(self, employee_id: str) -> Employee | None: ...

    def save_employee(self, employee: Employee) -> None: ...

    def delete_employee(self, employee_id: str) -> bool: ...

    def list_rows(self) -> dict[str, PayrollRow]: ...

    def get_row(self, employee_id: str) -> PayrollRow | None: ...

    def save_row(self, row: PayrollRow) -> None: ...

    def delete_row(self, employee_id: str) -> None: ...

    def reset(self) -> None: ...


class InMemoryPayrollRepository:
    """Simple in-memory repository for fast iteration and tests."""

    def __init__(self) -> None:
        self._state = PayrollState()
        self._employee_counter = 0

    # ------------------------------------------------------------------
    # period
    # ------------------------------------------------------------------
    def get_period(self) -> PeriodConfig:
        return self._state.period

    def save_period(self, period: PeriodConfig) -> None:
        self._state.period = period

    # ------------------------------------------------------------------
    # employee directory
    # ------------------------------------------------------------------
    def next_employee_id(self) -> str:
        while True:
            self._employee_counter += 1
            employee_id = f"emp-{self._employee_counter:05d}"
            if employee_id not in self._state.employees:
                return employee_id

    def list_employees(self) -> list[Employee]:
        return list(self._state.employees.values())

    def get_employee(self, employee_id: str) -> Employee | None:
        return self._state.employees.get(employee_id)

    def save_employee(self, employee: Employee) -> None:
        self._state.employees[employee.id] = employee

    def delete_employee(self, employee_id: str) -> bool:
        return self._state.employees.pop(employee_id, None) is not None

    # ------------------------------------------------------------------
    # payroll rows
    # ------------------------------------------------------------------
    def list_rows(self) -> dict[str, PayrollRow]:
        return dict(self._state.rows)

    def get_row(self, employee_id: str) -> PayrollRow | None:
        return self._state.rows.get(employee_id)

    def save_row(self, row: PayrollRow) -> None:
        self._state.rows[row.employee_id] = row

    def delete_row(self, employee_id: str) -> None:
        self._state.rows.pop(employee_id, None)

    def reset(self) -> None:
        self._state = PayrollState()
        self._employee_counter = 0
