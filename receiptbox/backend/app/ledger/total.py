"""Running total of all recorded amounts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from app.utils.currency import add_amounts, cell_to_amount, quantize_cents

if TYPE_CHECKING:
    from app.ledger.store import LedgerStore

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


def _cell_to_cents(value: Any) -> Decimal | None:
    amount = cell_to_amount(value)
    if amount is None:
        return None
    try:
        return quantize_cents(amount)
    except InvalidOperation:
        return None


@dataclass(frozen=True)
class SkippedRow:
    """A non-blank row whose amount could not be read."""

    partition: str
    row: int
    value: Any


@dataclass(frozen=True)
class RecomputeResult:
    """Result of rescanning the ledger."""

    total: Decimal
    rows_counted: int = 0
    skipped: list[SkippedRow] = field(default_factory=list)


class TotalAccumulator:
    """Cached sum of the amount column across every ledger sheet.

    Not thread-safe on its own; the coordinator calls it under its lock.
    """

    def __init__(self) -> None:
        self._total = ZERO

    @property
    def total(self) -> Decimal:
        return self._total

    def recompute(self, store: LedgerStore) -> RecomputeResult:
        """Rescan the workbook and replace the cached total.

        Rows whose amount is not a number (headers, notes typed in by hand)
        or is too large to hold in cents are left out of the sum and
        reported in ``skipped``.
        """
        total = Decimal(0)
        counted = 0
        skipped: list[SkippedRow] = []

        for cell in store.iter_amount_cells():
            amount = _cell_to_cents(cell.amount_value)
            if amount is None:
                logger.warning(
                    "Skipping %s row %d: cannot read amount %r",
                    cell.partition, cell.row, cell.amount_value,
                )
                skipped.append(SkippedRow(cell.partition, cell.row, cell.amount_value))
                continue
            total = add_amounts(total, amount)
            counted += 1

        self._total = quantize_cents(total)
        return RecomputeResult(total=self._total, rows_counted=counted, skipped=skipped)

    def add(self, amount: Decimal) -> Decimal:
        """Add a just-persisted amount and return the new total."""
        self._total = add_amounts(self._total, amount)
        return self._total
