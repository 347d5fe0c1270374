"""Serialises every ledger mutation behind one process-wide lock.

Lifecycle::

    UNINITIALIZED -> PARTITIONS_UNKNOWN -> TOTAL_UNKNOWN -> READY

A storage failure before READY is fatal (``LedgerStartupError``). Once
READY, a failed append is reported to that caller only and the
coordinator stays READY.
"""

from __future__ import annotations

import enum
import logging
import threading
from dataclasses import dataclass
from decimal import Decimal

from app.ledger.entry import Entry
from app.ledger.exceptions import (
    LedgerNotReadyError,
    LedgerStartupError,
    LedgerStorageError,
)
from app.ledger.store import LedgerStore, RowPlacement
from app.ledger.total import RecomputeResult, TotalAccumulator

logger = logging.getLogger(__name__)


class LedgerState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    PARTITIONS_UNKNOWN = "partitions_unknown"
    TOTAL_UNKNOWN = "total_unknown"
    READY = "ready"


@dataclass(frozen=True)
class SubmitOutcome:
    total: Decimal
    placement: RowPlacement


class AppendCoordinator:
    """Owns the ledger store, the running total and the lock guarding both."""

    def __init__(
        self,
        store: LedgerStore,
        accumulator: TotalAccumulator | None = None,
    ) -> None:
        self.store = store
        self._accumulator = accumulator or TotalAccumulator()
        self._lock = threading.Lock()
        self._state = LedgerState.UNINITIALIZED

    @property
    def state(self) -> LedgerState:
        return self._state

    @property
    def total(self) -> Decimal:
        with self._lock:
            return self._accumulator.total

    def start(self) -> RecomputeResult:
        """Bootstrap the workbook and load the total from it.

        Must succeed before any entry is accepted.

        Raises:
            LedgerStartupError: The workbook could not be created, opened
                or saved.
        """
        with self._lock:
            try:
                with self.store.open_table() as table:
                    self._state = LedgerState.PARTITIONS_UNKNOWN
                    self.store.ensure_partitions(table)
                self._state = LedgerState.TOTAL_UNKNOWN
                result = self._accumulator.recompute(self.store)
            except LedgerStorageError as e:
                raise LedgerStartupError(f"Ledger startup failed: {e}") from e
            self._state = LedgerState.READY

        logger.info(
            "Ledger %s ready: total %s over %d rows (%d skipped)",
            self.store.path, result.total, result.rows_counted, len(result.skipped),
        )
        return result

    def submit(self, entry: Entry) -> SubmitOutcome:
        """Persist an entry, then add it to the running total.

        Raises:
            LedgerNotReadyError: ``start()`` has not completed.
            LedgerStorageError: The append was not persisted; the total is
                unchanged.
        """
        with self._lock:
            if self._state is not LedgerState.READY:
                raise LedgerNotReadyError(f"Ledger is {self._state.value}")
            placement = self.store.append(entry)
            total = self._accumulator.add(entry.amount)
        return SubmitOutcome(total=total, placement=placement)

    def recompute(self) -> RecomputeResult:
        """Rescan the workbook, e.g. after it was edited by hand."""
        with self._lock:
            if self._state is not LedgerState.READY:
                raise LedgerNotReadyError(f"Ledger is {self._state.value}")
            result = self._accumulator.recompute(self.store)
        logger.info(
            "Recomputed total %s over %d rows (%d skipped)",
            result.total, result.rows_counted, len(result.skipped),
        )
        return result
