#!/usr/bin/env python
from __future__ import annotations

import argparse
import csv
from pathlib import Path


HEADER = [
    "Apellidos",
    "Nombres",
    "Cédula",
    "Cargo",
    "Asignación",
    "Sueldo Nominal",
    "Fecha Ingreso",
    "Fondo Reserva",
    "Acumula Fondo",
    "Mensualiza Décimos",
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Genera una plantilla CSV de nómina de empleados")
    parser.add_argument("--output", required=True, help="ruta del archivo de salida (.csv)")
    parser.add_argument("--employee", default="Pérez Gómez Juan", help="apellidos y nombres del empleado")
    parser.add_argument("--salary", default="470.00", help="sueldo nominal")
    args = parser.parse_args()

    last_names, _, first_names = args.employee.rpartition(" ")
    if not last_names:
        last_names, first_names = first_names, ""

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open("w", newline="", encoding="utf-8") as fp:
        writer = csv.writer(fp)
        writer.writerow(HEADER)
        writer.writerow([
            last_names,
            first_names,
            "0102030405",
            "Operario",
            "Planta",
            args.salary,
            "2023-01-01",
            "no",
            "no",
            "no",
        ])

    print(f"plantilla de nómina generada: {output}")


if __name__ == "__main__":
    main()
