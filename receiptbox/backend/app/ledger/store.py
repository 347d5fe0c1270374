"""Ledger store: month sheets, insertion point and append.

None of these methods lock. Every call must run under the
:class:`~app.ledger.coordinator.AppendCoordinator` lock, since each one
loads and saves the whole workbook.
"""

from __future__ import annotations

import datetime
import logging
import shutil
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from app.ledger.config import (
    AMOUNT_COL,
    COLUMN_WIDTHS,
    DATE_COL,
    MONTH_PARTITIONS,
    PAYEE_COL,
    get_partition_name,
    known_partitions,
)
from app.ledger.entry import Entry
from app.ledger.exceptions import LedgerStorageError
from app.ledger.table import PersistentTable, WorkbookTable
from app.utils.currency import format_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowPlacement:
    """Where an entry was written."""

    partition: str
    row: int


@dataclass(frozen=True)
class AmountCell:
    """One non-blank ledger row as seen by a rescan."""

    partition: str
    row: int
    date_value: Any
    amount_value: Any


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _sheet_text(value: str) -> str:
    """Drop control characters that cannot be stored in a worksheet."""
    return ILLEGAL_CHARACTERS_RE.sub("", value)


def _create_backup(file_path: Path) -> Path:
    """Create a timestamped backup of the file before modification.

    Returns the backup file path.
    """
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    backup_dir = file_path.parent / "backups"
    backup_dir.mkdir(parents=True, exist_ok=True)
    backup_path = backup_dir / f"{file_path.stem}_{timestamp}{file_path.suffix}"
    shutil.copy2(str(file_path), str(backup_path))
    return backup_path


class LedgerStore:
    """Owns the ledger workbook layout and row placement."""

    def __init__(
        self,
        path: str | Path,
        opener: Callable[[Path], PersistentTable] = WorkbookTable.open,
        backups: bool = False,
    ) -> None:
        self.path = Path(path)
        self._opener = opener
        self._backups = backups

    @contextmanager
    def open_table(self) -> Iterator[PersistentTable]:
        """Open (or create) the workbook and close it on exit."""
        table = self._opener(self.path)
        try:
            yield table
        finally:
            table.close()

    @staticmethod
    def ensure_partitions(table: PersistentTable) -> bool:
        """Create the 12 month sheets unless they already exist.

        Only the first month sheet is checked, so this is cheap enough to
        call before every append. Returns True if sheets were created.
        """
        if table.has_partition(MONTH_PARTITIONS[0]):
            return False

        logger.info("Setting up month sheets in ledger")
        for name in MONTH_PARTITIONS:
            table.create_partition(name, COLUMN_WIDTHS)
        table.save()
        return True

    def bootstrap(self) -> bool:
        """Open-or-create the workbook and make sure month sheets exist."""
        with self.open_table() as table:
            return self.ensure_partitions(table)

    @staticmethod
    def resolve_partition(month: int) -> str:
        return get_partition_name(month)

    @staticmethod
    def find_insertion_row(table: PersistentTable, partition: str) -> int:
        """Return the 1-based row an entry should go into.

        This is the first row whose date column is blank, or one past the
        last row when every row is filled.
        """
        rows = table.read_rows(partition)
        for index, row in enumerate(rows, 1):
            if not row or _is_blank(row[0]):
                return index
        return len(rows) + 1

    def append(self, entry: Entry) -> RowPlacement:
        """Write an entry into its month sheet and save the workbook.

        The amount is stored as exact decimal text (e.g. "12.50"). Control
        characters a worksheet cannot hold are removed from the payee.

        Raises:
            LedgerStorageError: The workbook could not be opened or saved,
                or the month sheet is missing.
        """
        if self._backups and self.path.exists():
            try:
                _create_backup(self.path)
            except OSError as e:
                raise LedgerStorageError(f"Cannot back up ledger: {e}") from e

        with self.open_table() as table:
            self.ensure_partitions(table)

            partition = self.resolve_partition(entry.month)
            if not table.has_partition(partition):
                raise LedgerStorageError(
                    f"Sheet '{partition}' not found. "
                    f"Available: {table.partition_names()}"
                )

            row = self.find_insertion_row(table, partition)
            table.write_cell(partition, row, DATE_COL, entry.display_date)
            table.write_cell(partition, row, PAYEE_COL, _sheet_text(entry.payee))
            table.write_cell(partition, row, AMOUNT_COL, format_amount(entry.amount))
            table.save()

            logger.info(
                "Recorded %s | %s | %s in %s row %d",
                entry.display_date, entry.payee, entry.amount, partition, row,
            )
            return RowPlacement(partition=partition, row=row)

    def iter_amount_cells(self) -> Iterator[AmountCell]:
        """Yield every non-blank row of every ledger sheet.

        Month sheets are scanned first, then the fallback sheet. Sheets
        that are not part of the ledger layout are ignored.
        """
        with self.open_table() as table:
            for partition in known_partitions():
                if not table.has_partition(partition):
                    continue
                for index, row in enumerate(table.read_rows(partition), 1):
                    date_value = row[DATE_COL - 1] if len(row) >= DATE_COL else None
                    amount_value = (
                        row[AMOUNT_COL - 1] if len(row) >= AMOUNT_COL else None
                    )
                    if _is_blank(date_value) and _is_blank(amount_value):
                        continue
                    yield AmountCell(partition, index, date_value, amount_value)
