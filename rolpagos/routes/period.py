from __future__ import annotations

from datetime import date

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError as ModelValidationError

from rolpagos.application import get_payroll_service
from rolpagos.core.day_count import MONTHS
from rolpagos.core.validation import ValidationError

router = APIRouter(prefix="/period", tags=["period"])


@router.get("")
async def get_period() -> dict:
    service = get_payroll_service()
    return {"period": service.get_period().model_dump(mode="json"), "months": MONTHS}


@router.put("")
async def update_period(payload: dict) -> dict:
    cutoff = payload.get("cutoff_date")
    year = payload.get("year")
    try:
        cutoff_date = date.fromisoformat(str(cutoff)) if cutoff else None
        year = int(year) if year not in (None, "") else None
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    service = get_payroll_service()
    try:
        period = service.configure_period(
            company=payload.get("company"),
            month=payload.get("month"),
            year=year,
            cutoff_date=cutoff_date,
        )
    except (ValidationError, ModelValidationError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"period": period.model_dump(mode="json")}
