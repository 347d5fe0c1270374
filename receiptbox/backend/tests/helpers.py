"""Workbook helpers shared by the ledger tests."""

from decimal import Decimal
from pathlib import Path

import openpyxl

LEDGER_YEAR = 2025


def sheet_rows(path: Path, sheet: str) -> list[tuple]:
    """Read back the non-empty rows of a ledger sheet."""
    wb = openpyxl.load_workbook(str(path))
    try:
        return [
            row for row in wb[sheet].iter_rows(values_only=True)
            if any(value is not None for value in row)
        ]
    finally:
        wb.close()


def write_rows(path: Path, sheet: str, rows: dict[int, tuple]) -> None:
    """Edit the workbook by hand, the way a person would in Excel."""
    wb = openpyxl.load_workbook(str(path))
    try:
        ws = wb[sheet]
        for row_num, values in rows.items():
            for col, value in enumerate(values, 1):
                ws.cell(row=row_num, column=col).value = value
        wb.save(str(path))
    finally:
        wb.close()


def as_decimal(value: object) -> Decimal:
    return Decimal(str(value))
