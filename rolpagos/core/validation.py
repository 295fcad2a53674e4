from __future__ import annotations

from datetime import MAXYEAR, MINYEAR

from rolpagos.core.schema import PeriodConfig


class ValidationError(Exception):
    """Raised when domain validation fails."""


def validate_year(year: int) -> None:
    if not MINYEAR <= year <= MAXYEAR:
        raise ValidationError(f"year must be between {MINYEAR} and {MAXYEAR}")


def validate_period(period: PeriodConfig) -> None:
    validate_year(period.year)
    if not 28 <= period.days_in_month <= 31:
        raise ValidationError("days_in_month must be between 28 and 31")
