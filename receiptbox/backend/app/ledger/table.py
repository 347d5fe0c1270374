"""Persistent table backed by an .xlsx workbook.

The ledger only needs a handful of whole-workbook operations: open (or
create), inspect sheets, read rows, write single cells and save. The
workbook is loaded in full and saved in full, so callers must serialise
every open/mutate/save cycle.
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Any, Protocol

import openpyxl
from openpyxl.utils.exceptions import IllegalCharacterError, InvalidFileException

from app.ledger.config import FALLBACK_PARTITION
from app.ledger.exceptions import LedgerStorageError

logger = logging.getLogger(__name__)

_OPEN_ERRORS = (OSError, InvalidFileException, zipfile.BadZipFile, KeyError)


class PersistentTable(Protocol):
    """Named partitions of rows and columns that can be saved durably."""

    def partition_names(self) -> list[str]: ...

    def has_partition(self, name: str) -> bool: ...

    def create_partition(self, name: str, column_widths: dict[str, float]) -> None: ...

    def read_rows(self, name: str) -> list[tuple[Any, ...]]: ...

    def write_cell(self, name: str, row: int, column: int, value: Any) -> None: ...

    def save(self) -> None: ...

    def close(self) -> None: ...


class WorkbookTable:
    """openpyxl implementation of :class:`PersistentTable`."""

    def __init__(self, path: Path, workbook: openpyxl.Workbook) -> None:
        self.path = path
        self._wb = workbook

    @classmethod
    def create(cls, file_path: str | Path) -> None:
        """Write an empty workbook whose only sheet is the fallback sheet."""
        path = Path(file_path)
        logger.info("Creating new ledger workbook %s", path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            wb = openpyxl.Workbook()
            wb.active.title = FALLBACK_PARTITION
            wb.save(str(path))
            wb.close()
        except OSError as e:
            raise LedgerStorageError(f"Cannot create ledger {path}: {e}") from e

    @classmethod
    def open(cls, file_path: str | Path) -> WorkbookTable:
        """Load the workbook, creating an empty one first if it is missing."""
        path = Path(file_path)
        if not path.exists():
            cls.create(path)
        try:
            wb = openpyxl.load_workbook(str(path))
        except _OPEN_ERRORS as e:
            raise LedgerStorageError(f"Cannot open ledger {path}: {e}") from e
        return cls(path, wb)

    def __enter__(self) -> WorkbookTable:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def partition_names(self) -> list[str]:
        return list(self._wb.sheetnames)

    def has_partition(self, name: str) -> bool:
        return name in self._wb.sheetnames

    def create_partition(self, name: str, column_widths: dict[str, float]) -> None:
        ws = self._wb.create_sheet(name)
        for letter, width in column_widths.items():
            ws.column_dimensions[letter].width = width

    def read_rows(self, name: str) -> list[tuple[Any, ...]]:
        """All rows of a sheet, top to bottom, as tuples of cell values.

        A sheet that was never written to returns no rows.
        """
        ws = self._wb[name]
        if ws.max_row == 1 and ws.max_column == 1 and ws.cell(1, 1).value is None:
            return []
        return list(ws.iter_rows(values_only=True))

    def write_cell(self, name: str, row: int, column: int, value: Any) -> None:
        """Set one cell. Strings are always stored as text, never formulas."""
        cell = self._wb[name].cell(row=row, column=column)
        try:
            cell.value = value
        except (IllegalCharacterError, ValueError, TypeError) as e:
            raise LedgerStorageError(
                f"Cannot write {name}!{cell.coordinate}: {e}"
            ) from e
        if isinstance(value, str):
            cell.data_type = "s"

    def save(self) -> None:
        try:
            self._wb.save(str(self.path))
        except OSError as e:
            raise LedgerStorageError(f"Cannot save ledger {self.path}: {e}") from e

    def close(self) -> None:
        self._wb.close()
