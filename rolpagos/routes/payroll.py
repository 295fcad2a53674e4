from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from rolpagos.application import get_payroll_service
from rolpagos.core.schema import EDITABLE_FIELDS
from rolpagos.core.storage import export_path
from rolpagos.core.validation import ValidationError
from rolpagos.exporters.bank_payroll_csv import export_bank_payroll
from rolpagos.exporters.payroll_roll_xlsx import export_payroll_roll

router = APIRouter(prefix="/payroll", tags=["payroll"])


@router.get("")
async def list_rows() -> dict:
    service = get_payroll_service()
    period = service.get_period()
    rows = service.sync_rows()
    return {
        "period": period.model_dump(mode="json"),
        "editable": list(EDITABLE_FIELDS),
        "items": [row.model_dump(mode="json") for row in rows],
    }


@router.get("/summary")
async def get_summary() -> dict:
    summary = get_payroll_service().summary()
    summary["totals"] = {name: float(value) for name, value in summary["totals"].items()}
    return summary


@router.get("/export/bank")
async def export_bank() -> FileResponse:
    service = get_payroll_service()
    period = service.get_period()
    employees = {employee.id: employee for employee in service.list_employees()}
    path = export_bank_payroll(export_path(f"banco_{period.year}_{period.month}.csv"), service.sync_rows(), employees)
    return FileResponse(path, media_type="text/csv", filename=path.name)


@router.get("/export/roll")
async def export_roll() -> FileResponse:
    service = get_payroll_service()
    period = service.get_period()
    employees = {employee.id: employee for employee in service.list_employees()}
    path = export_payroll_roll(
        export_path(f"rol_pagos_{period.year}_{period.month}.xlsx"), service.sync_rows(), employees, period
    )
    return FileResponse(
        path,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        filename=path.name,
    )


@router.put("/{employee_id}")
async def edit_row(employee_id: str, payload: dict) -> dict:
    field = payload.get("field")
    if not field:
        raise HTTPException(status_code=400, detail="field is required")

    service = get_payroll_service()
    try:
        row = service.edit_row(employee_id, str(field), payload.get("value"))
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if row is None:
        raise HTTPException(status_code=404, detail="no payroll row for employee")
    return row.model_dump(mode="json")
