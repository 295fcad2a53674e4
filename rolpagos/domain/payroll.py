"""Domain entities for payroll period orchestration."""
from __future__ import annotations

from dataclasses import dataclass, field

from rolpagos.core.schema import Employee, PayrollRow, PeriodConfig


@dataclass(slots=True)
class PayrollState:
    """Aggregated state of the payroll roll held in memory."""

    period: PeriodConfig = field(default_factory=PeriodConfig)
    employees: dict[str, Employee] = field(default_factory=dict)
    rows: dict[str, PayrollRow] = field(default_factory=dict)
