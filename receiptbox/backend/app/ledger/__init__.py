"""Receipt ledger engine.

Validates entries, writes them into the month sheets of the ledger
workbook and keeps the running total in step with it.
"""

from app.ledger.config import FALLBACK_PARTITION, MONTH_PARTITIONS, get_partition_name
from app.ledger.coordinator import AppendCoordinator, LedgerState, SubmitOutcome
from app.ledger.entry import Entry, validate_entry
from app.ledger.exceptions import (
    EntryValidationError,
    LedgerError,
    LedgerNotReadyError,
    LedgerStartupError,
    LedgerStorageError,
    ValidationReason,
)
from app.ledger.store import LedgerStore, RowPlacement
from app.ledger.table import PersistentTable, WorkbookTable
from app.ledger.total import RecomputeResult, SkippedRow, TotalAccumulator

__all__ = [
    "FALLBACK_PARTITION",
    "MONTH_PARTITIONS",
    "AppendCoordinator",
    "Entry",
    "EntryValidationError",
    "LedgerError",
    "LedgerNotReadyError",
    "LedgerStartupError",
    "LedgerState",
    "LedgerStorageError",
    "LedgerStore",
    "PersistentTable",
    "RecomputeResult",
    "RowPlacement",
    "SkippedRow",
    "SubmitOutcome",
    "TotalAccumulator",
    "ValidationReason",
    "WorkbookTable",
    "get_partition_name",
    "validate_entry",
]
