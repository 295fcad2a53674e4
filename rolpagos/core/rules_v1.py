from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any, Mapping

import yaml

from rolpagos.core.numbers import coerce_amount
from rolpagos.core.schema import EDITABLE_FIELDS, RAW_FIELDS, Employee, PayrollInputs, PayrollRow
from rolpagos.core.validation import ValidationError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


@dataclass(frozen=True)
class RateTable:
    hours_per_month: Decimal = Decimal("240")
    overtime_50_multiplier: Decimal = Decimal("1.5")
    overtime_100_multiplier: Decimal = Decimal("2")
    reference_wage: Decimal = Decimal("470")
    daily_hours: Decimal = Decimal("8")
    employee_social_security_rate: Decimal = Decimal("0.0945")
    months_per_year: Decimal = Decimal("12")


def _load_rate_table() -> RateTable:
    env_path = os.getenv("ROLPAGOS_RATES_PATH")
    path = Path(env_path).expanduser() if env_path else CONFIG_DIR / "rates.ec.yaml"
    if not path.exists():
        logger.info("rate table %s not found, using built-in rates", path)
        return RateTable()
    with path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    known = RateTable.__dataclass_fields__
    values = {key: Decimal(str(value)) for key, value in data.items() if key in known}
    return RateTable(**values)


RATES = _load_rate_table()


def _raw_values(raw_inputs: PayrollInputs | Mapping[str, Any]) -> dict[str, Decimal]:
    if isinstance(raw_inputs, PayrollInputs):
        return {name: getattr(raw_inputs, name) for name in RAW_FIELDS}
    return {name: coerce_amount(raw_inputs.get(name)) for name in RAW_FIELDS}


def derive(
    employee: Employee,
    days_in_month: int,
    raw_inputs: PayrollInputs | Mapping[str, Any],
    rates: RateTable = RATES,
) -> PayrollRow:
    """Compute every derived column of a payroll row from its raw inputs.

    ``days_in_month`` must be positive; the caller resolves it from the period.
    Nothing is rounded or clamped, negative results are returned as they are.
    """

    raw = _raw_values(raw_inputs)
    raw["days_in_month"] = Decimal(days_in_month)
    salary = employee.nominal_salary
    hourly = salary / rates.hours_per_month

    base = (salary / raw["days_in_month"]) * raw["days_worked"]
    ot_50 = hourly * raw["overtime_50_hours"] * rates.overtime_50_multiplier
    ot_100 = hourly * raw["overtime_100_hours"] * rates.overtime_100_multiplier
    earned = base + ot_50 + ot_100

    thirteenth = earned / rates.months_per_year
    # Fourteenth bonus accrues on the reference wage, not on the employee's salary.
    fourteenth = (
        (rates.reference_wage / rates.hours_per_month) * rates.daily_hours * raw["days_worked"]
    ) / rates.months_per_year

    total_earned = earned + raw["bonus"] + raw["per_diem"] + thirteenth + fourteenth
    contribution = (earned + raw["bonus"]) * rates.employee_social_security_rate
    total_deductions = (
        raw["employee_loan"]
        + raw["salary_advance"]
        + raw["income_tax_withholding"]
        + contribution
        + raw["other_deductions"]
        + raw["social_security_loans"]
    )
    subtotal = total_earned - total_deductions
    reserve_fund = earned / rates.months_per_year if employee.accrues_reserve_fund else Decimal("0")
    net_pay = subtotal + reserve_fund - raw["social_security_deposit"]

    return PayrollRow(
        employee_id=employee.id,
        nominal_salary=salary,
        **raw,
        base_salary_earned=base,
        overtime_50_value=ot_50,
        overtime_100_value=ot_100,
        thirteenth_month_accrual=thirteenth,
        fourteenth_month_accrual=fourteenth,
        total_earned=total_earned,
        employee_social_security_contribution=contribution,
        total_deductions=total_deductions,
        subtotal=subtotal,
        reserve_fund_value=reserve_fund,
        net_pay=net_pay,
    )


def build(employee: Employee, days_in_month: int, rates: RateTable = RATES) -> PayrollRow:
    """Return the initial row for an employee who worked the whole month."""

    inputs = PayrollInputs(days_in_month=days_in_month, days_worked=days_in_month)
    return derive(employee, days_in_month, inputs, rates)


def set_field(
    employee: Employee,
    days_in_month: int,
    row: PayrollRow,
    field: str,
    value: Any,
    rates: RateTable = RATES,
) -> PayrollRow:
    if field not in EDITABLE_FIELDS:
        raise ValidationError(f"{field!r} is not an editable payroll field")
    raw = _raw_values(row)
    raw[field] = coerce_amount(value)
    return derive(employee, days_in_month, raw, rates)
