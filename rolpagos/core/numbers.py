from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

# Values with more integer or fractional digits than this read as zero, so that
# products of inputs stay far inside the decimal context's exponent range.
MAX_MAGNITUDE = 15


def _bounded(value: Decimal) -> Decimal:
    if not value.is_finite() or not value:
        return Decimal("0")
    if not -MAX_MAGNITUDE <= value.adjusted() <= MAX_MAGNITUDE:
        return Decimal("0")
    return value


def coerce_amount(value: Any) -> Decimal:
    """Parse an edited value as a Decimal, reading anything unparseable as zero."""

    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        return _bounded(value)
    text = str(value).strip()
    if not text:
        return Decimal("0")
    try:
        result = Decimal(text)
    except (InvalidOperation, TypeError, ValueError):
        return Decimal("0")
    return _bounded(result)


def quantize(value: Decimal) -> Decimal:
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
