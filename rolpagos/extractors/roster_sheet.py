"""Parser for employee roster spreadsheets (nómina de empleados)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from rolpagos.core.name_normalize import fold, split_full_name
from rolpagos.core.numbers import coerce_amount

TRUE_VALUES = {"si", "s", "yes", "y", "true", "1", "x", "verdadero"}


@dataclass
class RosterParseResult:
    employees: list[dict[str, Any]] = field(default_factory=list)
    skipped: int = 0


def _normalise_columns(dataframe: pd.DataFrame) -> pd.DataFrame:
    renamed = {col: str(col).strip() for col in dataframe.columns}
    dataframe = dataframe.rename(columns=renamed)
    return dataframe.dropna(how="all").fillna("")


def _find_column(dataframe: pd.DataFrame, keywords: list[str], exclude: Iterable[str] = ()) -> str | None:
    taken = set(exclude)
    for keyword in keywords:
        for column in dataframe.columns:
            if column in taken:
                continue
            if keyword in fold(column):
                return column
    return None


def _parse_flag(value: Any) -> bool:
    return fold(value) in TRUE_VALUES


def _parse_date(value: Any):
    if not str(value).strip():
        return None
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def _read(path: Path, sheet_name: str | int | None) -> pd.DataFrame:
    if path.suffix.lower() == ".csv":
        return pd.read_csv(path, dtype=str)
    return pd.read_excel(path, sheet_name=sheet_name or 0, dtype=str)


def parse(path: Path, sheet_name: str | int | None = None) -> RosterParseResult:
    dataframe = _normalise_columns(_read(path, sheet_name))

    last_names_column = _find_column(dataframe, ["apellido", "last name", "surname"])
    first_names_column = _find_column(dataframe, ["nombres", "first name", "given name"], exclude=[last_names_column])
    full_name_column = _find_column(dataframe, ["nombre completo", "nombre", "full name", "name"],
                                    exclude=[last_names_column, first_names_column])
    if last_names_column and not first_names_column and any(
        keyword in fold(last_names_column) for keyword in ("nombre", "first", "given")
    ):
        # "Apellidos y Nombres" holds the whole name in one column.
        full_name_column, last_names_column = last_names_column, None
    if not (last_names_column or full_name_column):
        return RosterParseResult(skipped=len(dataframe))

    national_id_column = _find_column(dataframe, ["cedula", "identificacion", "national id", "id number"])
    position_column = _find_column(dataframe, ["cargo", "position"])
    assignment_column = _find_column(dataframe, ["asignacion", "assignment"])
    salary_column = _find_column(dataframe, ["sueldo", "salario", "salary"])
    hire_date_column = _find_column(dataframe, ["ingreso", "hire"])
    active_column = _find_column(dataframe, ["estado", "activo", "active"])
    accrues_column = _find_column(dataframe, ["acumula", "accrues"])
    reserve_column = _find_column(dataframe, ["fondo", "reserve"], exclude=[accrues_column])
    monthlyizes_column = _find_column(dataframe, ["mensualiza", "decimo", "monthly"])

    result = RosterParseResult()
    for _, row in dataframe.iterrows():
        if last_names_column:
            last_names = str(row.get(last_names_column) or "").strip()
            first_names = str(row.get(first_names_column) or "").strip() if first_names_column else ""
        else:
            last_names, first_names = split_full_name(str(row.get(full_name_column) or ""))
        if not (last_names or first_names):
            result.skipped += 1
            continue

        employee: dict[str, Any] = {"last_names": last_names, "first_names": first_names}
        if national_id_column:
            employee["national_id"] = str(row.get(national_id_column) or "").strip()
        if position_column:
            employee["position"] = str(row.get(position_column) or "").strip()
        if assignment_column:
            employee["assignment"] = str(row.get(assignment_column) or "").strip()
        if salary_column and str(row.get(salary_column)).strip():
            employee["nominal_salary"] = coerce_amount(row.get(salary_column))
        if hire_date_column:
            hire_date = _parse_date(row.get(hire_date_column))
            if hire_date is not None:
                employee["hire_date"] = hire_date
        if active_column and str(row.get(active_column)).strip():
            value = fold(row.get(active_column))
            employee["active"] = value.startswith("activ") or value in TRUE_VALUES
        if reserve_column:
            employee["has_reserve_fund"] = _parse_flag(row.get(reserve_column))
        if accrues_column:
            employee["accrues_reserve_fund"] = _parse_flag(row.get(accrues_column))
        if monthlyizes_column:
            employee["monthlyizes_thirteenth_bonus"] = _parse_flag(row.get(monthlyizes_column))

        result.employees.append(employee)

    return result
