"""Application service layer for the employee directory and the payroll roll."""
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

from rolpagos.core import rules_v1
from rolpagos.core.day_count import days_in_month, month_label
from rolpagos.core.name_normalize import split_full_name
from rolpagos.core.schema import DERIVED_FIELDS, EDITABLE_FIELDS, Employee, PayrollRow, PeriodConfig
from rolpagos.core.validation import ValidationError, validate_period, validate_year
from rolpagos.extractors import roster_sheet
from rolpagos.infrastructure import InMemoryPayrollRepository, PayrollRepository

logger = logging.getLogger(__name__)

# Raw columns that are currency amounts; day and hour counts are not totalled.
AMOUNT_FIELDS = tuple(
    name for name in EDITABLE_FIELDS if name not in {"days_worked", "overtime_50_hours", "overtime_100_hours"}
)


class PayrollService:
    """Coordinates the directory, the period and the rows derived from them."""

    def __init__(self, repository: PayrollRepository) -> None:
        self._repository = repository

    # ------------------------------------------------------------------
    # period
    # ------------------------------------------------------------------
    def get_period(self) -> PeriodConfig:
        return self._repository.get_period()

    def configure_period(
        self,
        *,
        company: str | None = None,
        month: str | int | None = None,
        year: int | None = None,
        cutoff_date: date | None = None,
    ) -> PeriodConfig:
        current = self._repository.get_period()
        year = current.year if year is None else int(year)
        validate_year(year)
        if month is None:
            label = current.month
        else:
            label = month_label(month) or str(month).strip()

        period = PeriodConfig(
            company=current.company if company is None else str(company).strip(),
            month=label,
            year=year,
            cutoff_date=current.cutoff_date if cutoff_date is None else cutoff_date,
            days_in_month=days_in_month(label, year),
        )
        validate_period(period)
        self._repository.save_period(period)

        if period.days_in_month != current.days_in_month:
            logger.info(
                "day count changed from %d to %d, rebuilding payroll rows",
                current.days_in_month,
                period.days_in_month,
            )
            for employee_id in list(self._repository.list_rows()):
                self._repository.delete_row(employee_id)
        self.sync_rows()
        return period

    # ------------------------------------------------------------------
    # employee directory
    # ------------------------------------------------------------------
    def list_employees(self, *, active_only: bool = False) -> list[Employee]:
        employees = self._repository.list_employees()
        if active_only:
            return [employee for employee in employees if employee.active]
        return employees

    def get_employee(self, employee_id: str) -> Employee | None:
        return self._repository.get_employee(employee_id)

    def add_employee(self, **fields: Any) -> Employee:
        fields = self._apply_full_name(fields)
        employee_id = fields.pop("id", None) or self._repository.next_employee_id()
        if self._repository.get_employee(employee_id) is not None:
            raise ValidationError(f"employee {employee_id} already exists")
        employee = Employee(id=employee_id, **fields)
        self._repository.save_employee(employee)
        self._refresh_row(employee)
        logger.info("added employee %s", employee.id)
        return employee

    def update_employee(self, employee_id: str, **changes: Any) -> Employee | None:
        employee = self._repository.get_employee(employee_id)
        if employee is None:
            return None
        changes = self._apply_full_name(changes)
        changes.pop("id", None)
        updated = Employee(**{**employee.model_dump(), **changes})
        self._repository.save_employee(updated)
        self._refresh_row(updated)
        return updated

    def set_full_name(self, employee_id: str, full_name: str) -> Employee | None:
        return self.update_employee(employee_id, full_name=full_name)

    def toggle_active(self, employee_id: str) -> Employee | None:
        employee = self._repository.get_employee(employee_id)
        if employee is None:
            return None
        return self.update_employee(employee_id, active=not employee.active)

    def delete_employee(self, employee_id: str) -> bool:
        self._repository.delete_row(employee_id)
        deleted = self._repository.delete_employee(employee_id)
        if deleted:
            logger.info("deleted employee %s", employee_id)
        return deleted

    def import_roster(self, path: Path) -> list[Employee]:
        result = roster_sheet.parse(path)
        imported = [self.add_employee(**record) for record in result.employees]
        logger.info("imported %d employees from %s (%d rows skipped)", len(imported), path.name, result.skipped)
        return imported

    @staticmethod
    def _apply_full_name(fields: dict[str, Any]) -> dict[str, Any]:
        fields = dict(fields)
        full_name = fields.pop("full_name", None)
        if full_name is not None:
            fields["last_names"], fields["first_names"] = split_full_name(str(full_name))
        return fields

    # ------------------------------------------------------------------
    # payroll rows
    # ------------------------------------------------------------------
    def _refresh_row(self, employee: Employee) -> PayrollRow | None:
        if not employee.active:
            self._repository.delete_row(employee.id)
            return None
        days = self._repository.get_period().days_in_month
        existing = self._repository.get_row(employee.id)
        if existing is None:
            row = rules_v1.build(employee, days)
        else:
            row = rules_v1.derive(employee, days, existing)
        self._repository.save_row(row)
        return row

    def sync_rows(self) -> list[PayrollRow]:
        """Bring the row mapping in line with the active employees and the period."""

        known = {employee.id for employee in self._repository.list_employees()}
        for employee_id in self._repository.list_rows():
            if employee_id not in known:
                self._repository.delete_row(employee_id)
        for employee in self._repository.list_employees():
            self._refresh_row(employee)
        return self.list_rows()

    def list_rows(self) -> list[PayrollRow]:
        rows = self._repository.list_rows()
        return [rows[employee.id] for employee in self.list_employees(active_only=True) if employee.id in rows]

    def get_row(self, employee_id: str) -> PayrollRow | None:
        return self._repository.get_row(employee_id)

    def edit_row(self, employee_id: str, field: str, value: Any) -> PayrollRow | None:
        employee = self._repository.get_employee(employee_id)
        if employee is None or not employee.active:
            logger.debug("ignoring edit of %s for unknown or inactive employee %s", field, employee_id)
            return None
        row = self._repository.get_row(employee_id) or self._refresh_row(employee)
        days = self._repository.get_period().days_in_month
        updated = rules_v1.set_field(employee, days, row, field, value)
        self._repository.save_row(updated)
        return updated

    def summary(self) -> dict[str, object]:
        period = self.get_period()
        rows = self.list_rows()
        totals = {
            name: sum((getattr(row, name) for row in rows), Decimal("0"))
            for name in AMOUNT_FIELDS + DERIVED_FIELDS
        }
        return {
            "company": period.company,
            "month": period.month,
            "year": period.year,
            "days_in_month": period.days_in_month,
            "employees": len(rows),
            "totals": totals,
        }

    # ------------------------------------------------------------------
    # testing helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self._repository.reset()


_repository = InMemoryPayrollRepository()
_service = PayrollService(_repository)


def get_payroll_service() -> PayrollService:
    """Return the singleton payroll service for the process."""

    return _service


def reset_payroll_state() -> None:
    """Reset the in-memory store (used in tests)."""

    _service.reset()
