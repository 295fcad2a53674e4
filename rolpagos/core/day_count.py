"""Day-count resolution for payroll periods."""

from __future__ import annotations

import calendar
import logging

from rolpagos.core.name_normalize import fold

logger = logging.getLogger(__name__)

MONTHS = [
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
]

FALLBACK_DAYS = 30

_MONTH_INDEX = {fold(name): index for index, name in enumerate(MONTHS, start=1)}
_MONTH_INDEX["setiembre"] = 9


def month_number(month: str | int) -> int | None:
    if isinstance(month, int):
        return month if 1 <= month <= 12 else None
    text = str(month).strip()
    if text.isdigit():
        return month_number(int(text))
    return _MONTH_INDEX.get(fold(text))


def month_label(month: str | int) -> str | None:
    number = month_number(month)
    return MONTHS[number - 1] if number else None


def days_in_month(month: str | int, year: int) -> int:
    """Return the calendar days of ``month`` in ``year``; unknown months count 30 days."""

    number = month_number(month)
    if number is None:
        logger.warning("unknown month %r, assuming %d days", month, FALLBACK_DAYS)
        return FALLBACK_DAYS
    return calendar.monthrange(year, number)[1]
