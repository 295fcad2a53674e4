from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping

import pandas as pd

from rolpagos.core.numbers import quantize
from rolpagos.core.schema import Employee, PayrollRow


def export_bank_payroll(path: Path, rows: Iterable[PayrollRow], employees: Mapping[str, Employee]) -> Path:
    records = []
    for row in rows:
        employee = employees.get(row.employee_id)
        if employee is None:
            continue
        records.append({
            "employee_id": row.employee_id,
            "name": employee.full_name,
            "national_id": employee.national_id,
            "amount": f"{quantize(row.net_pay):.2f}",
        })
    df = pd.DataFrame(records, columns=["employee_id", "name", "national_id", "amount"])
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return path
