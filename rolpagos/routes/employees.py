from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from pydantic import ValidationError as ModelValidationError

from rolpagos.application import get_payroll_service
from rolpagos.core.storage import save_upload
from rolpagos.core.validation import ValidationError

router = APIRouter(prefix="/employees", tags=["employees"])

EDITABLE_ATTRIBUTES = {
    "full_name",
    "last_names",
    "first_names",
    "position",
    "assignment",
    "hire_date",
    "nominal_salary",
    "national_id",
    "active",
    "has_reserve_fund",
    "accrues_reserve_fund",
    "monthlyizes_thirteenth_bonus",
}


def _serialise(employee) -> dict:
    data = employee.model_dump(mode="json")
    data["full_name"] = employee.full_name
    return data


def _attributes(payload: dict) -> dict:
    unknown = sorted(set(payload) - EDITABLE_ATTRIBUTES)
    if unknown:
        raise HTTPException(status_code=400, detail=f"unknown employee attributes: {', '.join(unknown)}")
    return dict(payload)


@router.get("")
async def list_employees(active: bool = Query(default=False)) -> dict:
    service = get_payroll_service()
    return {"items": [_serialise(item) for item in service.list_employees(active_only=active)]}


@router.post("")
async def create_employee(payload: dict) -> dict:
    service = get_payroll_service()
    try:
        employee = service.add_employee(**_attributes(payload))
    except (ValidationError, ModelValidationError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _serialise(employee)


@router.post("/import")
async def import_roster(file: UploadFile = File(...)) -> dict:
    """Upload a roster workbook or CSV and add every employee found in it."""
    try:
        if not file.filename:
            raise HTTPException(status_code=400, detail="Uploaded file must have a filename")
        path = save_upload(Path(file.filename).name, file.file)
    finally:
        await file.close()

    service = get_payroll_service()
    try:
        imported = service.import_roster(path)
    except (ValidationError, ModelValidationError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"items": [_serialise(item) for item in imported]}


@router.get("/{employee_id}")
async def get_employee(employee_id: str) -> dict:
    employee = get_payroll_service().get_employee(employee_id)
    if employee is None:
        raise HTTPException(status_code=404, detail="employee not found")
    return _serialise(employee)


@router.patch("/{employee_id}")
async def update_employee(employee_id: str, payload: dict) -> dict:
    service = get_payroll_service()
    try:
        employee = service.update_employee(employee_id, **_attributes(payload))
    except ModelValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if employee is None:
        raise HTTPException(status_code=404, detail="employee not found")
    return _serialise(employee)


@router.post("/{employee_id}/toggle")
async def toggle_employee(employee_id: str) -> dict:
    employee = get_payroll_service().toggle_active(employee_id)
    if employee is None:
        raise HTTPException(status_code=404, detail="employee not found")
    return _serialise(employee)


@router.delete("/{employee_id}")
async def delete_employee(employee_id: str) -> dict:
    if not get_payroll_service().delete_employee(employee_id):
        raise HTTPException(status_code=404, detail="employee not found")
    return {"deleted": employee_id}
