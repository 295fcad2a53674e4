import csv
import io
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

sys.path.append(str(Path(__file__).resolve().parents[1]))

from rolpagos.application import get_payroll_service, reset_payroll_state


@pytest.fixture(autouse=True)
def reset_state():
    reset_payroll_state()
    yield
    reset_payroll_state()


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("ROLPAGOS_DATA_ROOT", str(tmp_path))
    from rolpagos.app import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def test_end_to_end_workflow(client, tmp_path):
    # 1. configure the period
    response = client.put(
        "/api/period",
        json={"company": "Comercial Andina", "month": "Noviembre", "year": 2025, "cutoff_date": "2025-11-30"},
    )
    assert response.status_code == 200
    period = response.json()["period"]
    assert period["days_in_month"] == 30
    assert period["cutoff_date"] == "2025-11-30"

    # 2. register employees
    response = client.post("/api/employees", json={"full_name": "Pérez Gómez Juan", "nominal_salary": 470})
    assert response.status_code == 200
    juan = response.json()
    assert juan["last_names"] == "Pérez Gómez"
    assert juan["full_name"] == "Pérez Gómez Juan"

    response = client.post(
        "/api/employees",
        json={"full_name": "Andrade María", "nominal_salary": "800", "accrues_reserve_fund": True},
    )
    maria = response.json()

    # 3. rows are built for the whole month
    response = client.get("/api/payroll")
    assert response.status_code == 200
    data = response.json()
    assert "bonus" in data["editable"]
    rows = {item["employee_id"]: item for item in data["items"]}
    assert rows[juan["id"]]["days_worked"] == 30
    assert rows[juan["id"]]["net_pay"] == pytest.approx(503.9183, abs=1e-4)
    assert rows[juan["id"]]["reserve_fund_value"] == 0
    assert rows[maria["id"]]["reserve_fund_value"] == pytest.approx(800 / 12, abs=1e-6)

    # 4. edit a raw field
    response = client.put(f"/api/payroll/{juan['id']}", json={"field": "bonus", "value": "30"})
    assert response.status_code == 200
    row = response.json()
    assert row["bonus"] == 30
    assert row["employee_social_security_contribution"] == pytest.approx(500 * 0.0945)

    # malformed text reads as zero
    response = client.put(f"/api/payroll/{juan['id']}", json={"field": "bonus", "value": "treinta"})
    assert response.json()["net_pay"] == pytest.approx(503.9183, abs=1e-4)

    # 5. summary
    summary = client.get("/api/payroll/summary").json()
    assert summary["employees"] == 2
    assert summary["totals"]["net_pay"] == pytest.approx(sum(item["net_pay"] for item in data["items"]))

    # 6. exports
    response = client.get("/api/payroll/export/bank")
    assert response.status_code == 200
    records = list(csv.DictReader(io.StringIO(response.text)))
    assert records[0]["name"] == "Pérez Gómez Juan"
    assert records[0]["amount"] == "503.92"

    response = client.get("/api/payroll/export/roll")
    assert response.status_code == 200
    workbook = load_workbook(io.BytesIO(response.content))
    sheet = workbook.active
    assert sheet.title == "Noviembre 2025"
    assert "Comercial Andina" in sheet["A1"].value
    headers = [cell.value for cell in sheet[2]]
    assert headers[:3] == ["No.", "Nombre", "Cargo"]
    assert sheet.cell(row=3, column=headers.index("Neto a Recibir") + 1).value == pytest.approx(503.92)

    # 7. deactivating drops the row
    response = client.post(f"/api/employees/{maria['id']}/toggle")
    assert response.json()["active"] is False
    items = client.get("/api/payroll").json()["items"]
    assert [item["employee_id"] for item in items] == [juan["id"]]

    service = get_payroll_service()
    assert service.get_row(maria["id"]) is None


def test_period_change_rebuilds_rows(client):
    client.put("/api/period", json={"company": "ACME", "month": "Enero", "year": 2025})
    employee = client.post("/api/employees", json={"full_name": "Mora Ana"}).json()
    client.put(f"/api/payroll/{employee['id']}", json={"field": "days_worked", "value": 15})

    response = client.put("/api/period", json={"month": "Febrero"})
    assert response.json()["period"]["days_in_month"] == 28

    row = client.get("/api/payroll").json()["items"][0]
    assert row["days_in_month"] == 28
    assert row["days_worked"] == 28


def test_validation_errors(client):
    employee = client.post("/api/employees", json={"full_name": "Mora Ana"}).json()

    response = client.put(f"/api/payroll/{employee['id']}", json={"field": "net_pay", "value": 1})
    assert response.status_code == 400

    response = client.put(f"/api/payroll/{employee['id']}", json={"value": 1})
    assert response.status_code == 400

    response = client.put("/api/payroll/emp-missing", json={"field": "bonus", "value": 1})
    assert response.status_code == 404

    response = client.put("/api/period", json={"cutoff_date": "31/01/2025"})
    assert response.status_code == 400

    response = client.put("/api/period", json={"year": 0})
    assert response.status_code == 400

    response = client.post("/api/employees", json={"salary": 10})
    assert response.status_code == 400

    response = client.patch("/api/employees/emp-missing", json={"position": "Gerente"})
    assert response.status_code == 404

    response = client.delete("/api/employees/emp-missing")
    assert response.status_code == 404


def test_employee_directory_routes(client):
    created = client.post("/api/employees", json={"full_name": "Vera Luis", "position": "Chofer"}).json()

    response = client.patch(f"/api/employees/{created['id']}", json={"full_name": "Vera Castro Luis", "nominal_salary": 600})
    assert response.status_code == 200
    assert response.json()["last_names"] == "Vera Castro"

    row = client.get("/api/payroll").json()["items"][0]
    assert row["nominal_salary"] == 600

    assert client.get(f"/api/employees/{created['id']}").json()["position"] == "Chofer"
    assert len(client.get("/api/employees", params={"active": True}).json()["items"]) == 1

    response = client.delete(f"/api/employees/{created['id']}")
    assert response.status_code == 200
    assert client.get("/api/payroll").json()["items"] == []


def test_roster_import_route(client, tmp_path):
    path = tmp_path / "roster.csv"
    path.write_text(
        "Apellidos,Nombres,Cédula,Sueldo Nominal,Acumula Fondo\n"
        "Pérez,Juan,0102030405,470,si\n",
        encoding="utf-8",
    )
    with path.open("rb") as fp:
        response = client.post("/api/employees/import", files={"file": ("roster.csv", fp, "text/csv")})
    assert response.status_code == 200
    items = response.json()["items"]
    assert items[0]["national_id"] == "0102030405"
    assert items[0]["accrues_reserve_fund"] is True
    assert (tmp_path / "uploads" / "roster.csv").exists()

    rows = client.get("/api/payroll").json()["items"]
    assert rows[0]["reserve_fund_value"] > 0


def test_root_landing(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"


def test_amounts_are_json_numbers(client):
    client.put("/api/period", json={"company": "ACME", "month": "Noviembre", "year": 2025})
    employee = client.post("/api/employees", json={"full_name": "Mora Ana", "nominal_salary": "470"}).json()
    assert isinstance(employee["nominal_salary"], float)

    row = client.get("/api/payroll").json()["items"][0]
    for name in ("days_in_month", "days_worked", "bonus", "nominal_salary", "net_pay", "reserve_fund_value"):
        assert isinstance(row[name], float), name
    assert row["net_pay"] == pytest.approx(503.9183, abs=1e-4)

    edited = client.put(f"/api/payroll/{employee['id']}", json={"field": "bonus", "value": 30}).json()
    assert isinstance(edited["bonus"], float)

    totals = client.get("/api/payroll/summary").json()["totals"]
    assert isinstance(totals["net_pay"], float)


def test_out_of_range_edit_reads_as_zero(client):
    employee = client.post("/api/employees", json={"full_name": "Mora Ana"}).json()
    before = client.get("/api/payroll").json()["items"][0]

    response = client.put(f"/api/payroll/{employee['id']}", json={"field": "overtime_50_hours", "value": "9e999999"})
    assert response.status_code == 200
    assert response.json()["net_pay"] == pytest.approx(before["net_pay"])
