"""Workbook export of the monthly payroll roll."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping

import pandas as pd

from rolpagos.core.numbers import quantize
from rolpagos.core.schema import Employee, PayrollRow, PeriodConfig

ROLL_COLUMNS: dict[str, str] = {
    "days_in_month": "Días Mes",
    "days_worked": "Días Trab.",
    "base_salary_earned": "Sueldo",
    "overtime_50_hours": "Horas 50%",
    "overtime_50_value": "Valor Horas 50%",
    "overtime_100_hours": "Horas 100%",
    "overtime_100_value": "Valor Horas 100%",
    "bonus": "Bonificación",
    "per_diem": "Viáticos",
    "thirteenth_month_accrual": "Décimo Tercero",
    "fourteenth_month_accrual": "Décimo Cuarto",
    "total_earned": "Total Ganado",
    "employee_loan": "Préstamos Empleado",
    "salary_advance": "Anticipo Sueldo",
    "income_tax_withholding": "Retención Renta",
    "employee_social_security_contribution": "Aporte Personal",
    "other_deductions": "Otros Descuentos",
    "social_security_loans": "Préstamos IESS",
    "total_deductions": "Total Descuentos",
    "subtotal": "Subtotal",
    "reserve_fund_value": "Fondo Reserva",
    "social_security_deposit": "Depósito IESS",
    "net_pay": "Neto a Recibir",
}


def export_payroll_roll(
    path: Path,
    rows: Iterable[PayrollRow],
    employees: Mapping[str, Employee],
    period: PeriodConfig,
) -> Path:
    records = []
    for index, row in enumerate(rows, start=1):
        employee = employees.get(row.employee_id)
        record: dict[str, object] = {
            "No.": index,
            "Nombre": employee.full_name if employee else row.employee_id,
            "Cargo": employee.position if employee else "",
        }
        for field, header in ROLL_COLUMNS.items():
            record[header] = float(quantize(getattr(row, field)))
        records.append(record)

    columns = ["No.", "Nombre", "Cargo", *ROLL_COLUMNS.values()]
    df = pd.DataFrame(records, columns=columns)
    sheet_name = f"{period.month} {period.year}"[:31]
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False, startrow=1)
        writer.sheets[sheet_name].cell(row=1, column=1, value=f"{period.company} - Rol de Pagos {period.month} {period.year}")
    return path
