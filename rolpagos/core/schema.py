from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Annotated, Literal, get_args

from pydantic import BaseModel, Field, PlainSerializer, field_validator

from rolpagos.core.numbers import coerce_amount

# Amounts go over the wire as JSON numbers whatever the FastAPI encoder defaults to.
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

RawField = Literal[
    "days_worked",
    "overtime_50_hours",
    "overtime_100_hours",
    "bonus",
    "per_diem",
    "employee_loan",
    "salary_advance",
    "income_tax_withholding",
    "other_deductions",
    "social_security_loans",
    "social_security_deposit",
]

EDITABLE_FIELDS: tuple[str, ...] = get_args(RawField)
RAW_FIELDS: tuple[str, ...] = ("days_in_month",) + EDITABLE_FIELDS
DERIVED_FIELDS: tuple[str, ...] = (
    "base_salary_earned",
    "overtime_50_value",
    "overtime_100_value",
    "thirteenth_month_accrual",
    "fourteenth_month_accrual",
    "total_earned",
    "employee_social_security_contribution",
    "total_deductions",
    "subtotal",
    "reserve_fund_value",
    "net_pay",
)


class Employee(BaseModel):
    id: str
    last_names: str = ""
    first_names: str = ""
    position: str = ""
    assignment: str = ""
    hire_date: date = Field(default_factory=date.today)
    nominal_salary: Amount = Decimal("470")
    national_id: str = ""
    active: bool = True
    has_reserve_fund: bool = False
    accrues_reserve_fund: bool = False
    monthlyizes_thirteenth_bonus: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.last_names} {self.first_names}".strip()

    @field_validator("nominal_salary", mode="before")
    @classmethod
    def _coerce_salary(cls, value: object) -> Decimal:
        return coerce_amount(value)


class PeriodConfig(BaseModel):
    company: str = ""
    month: str = "Enero"
    year: int = Field(default_factory=lambda: date.today().year)
    cutoff_date: date = Field(default_factory=date.today)
    days_in_month: int = Field(default=31, gt=0)


class PayrollInputs(BaseModel):
    """Editable side of a payroll row; malformed numbers read as zero."""

    days_in_month: Amount = Decimal("0")
    days_worked: Amount = Decimal("0")
    overtime_50_hours: Amount = Decimal("0")
    overtime_100_hours: Amount = Decimal("0")
    bonus: Amount = Decimal("0")
    per_diem: Amount = Decimal("0")
    employee_loan: Amount = Decimal("0")
    salary_advance: Amount = Decimal("0")
    income_tax_withholding: Amount = Decimal("0")
    other_deductions: Amount = Decimal("0")
    social_security_loans: Amount = Decimal("0")
    social_security_deposit: Amount = Decimal("0")

    @field_validator(*RAW_FIELDS, mode="before")
    @classmethod
    def _coerce(cls, value: object) -> Decimal:
        return coerce_amount(value)


class PayrollRow(PayrollInputs):
    employee_id: str
    nominal_salary: Amount = Decimal("0")

    base_salary_earned: Amount = Decimal("0")
    overtime_50_value: Amount = Decimal("0")
    overtime_100_value: Amount = Decimal("0")
    thirteenth_month_accrual: Amount = Decimal("0")
    fourteenth_month_accrual: Amount = Decimal("0")
    total_earned: Amount = Decimal("0")
    employee_social_security_contribution: Amount = Decimal("0")
    total_deductions: Amount = Decimal("0")
    subtotal: Amount = Decimal("0")
    reserve_fund_value: Amount = Decimal("0")
    net_pay: Amount = Decimal("0")

    def raw_inputs(self) -> PayrollInputs:
        return PayrollInputs(**self.model_dump(include=set(RAW_FIELDS)))
