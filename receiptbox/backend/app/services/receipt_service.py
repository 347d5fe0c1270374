import logging
from dataclasses import dataclass

from app.ledger.coordinator import AppendCoordinator
from app.ledger.entry import validate_entry
from app.ledger.exceptions import EntryValidationError, LedgerError
from app.utils.currency import format_amount

logger = logging.getLogger(__name__)

STORAGE_FAILURE_MESSAGE = "Could not record entry, please try again"


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of one receipt submission, ready to send back to the client."""

    success: bool
    message: str
    total: str | None = None
    partition: str | None = None
    row: int | None = None


def submit_entry(
    coordinator: AppendCoordinator,
    raw_date: str,
    payee: str,
    raw_amount: str,
    year: int,
) -> SubmitResult:
    """Validate a raw receipt and record it in the ledger.

    Validation and storage problems are returned as failed results,
    never raised.
    """
    try:
        entry = validate_entry(raw_date, payee, raw_amount, year)
    except EntryValidationError as e:
        logger.info("Rejected receipt %r / %r: %s", raw_date, raw_amount, e.message)
        return SubmitResult(success=False, message=e.message)

    logger.info(
        "Received receipt: date=%s payee=%s amount=%s",
        entry.display_date, entry.payee, format_amount(entry.amount),
    )

    try:
        outcome = coordinator.submit(entry)
    except LedgerError:
        logger.exception("Failed to record receipt for %s", entry.payee)
        return SubmitResult(success=False, message=STORAGE_FAILURE_MESSAGE)

    total = format_amount(outcome.total)
    return SubmitResult(
        success=True,
        message=f"OK. Total: {total}",
        total=total,
        partition=outcome.placement.partition,
        row=outcome.placement.row,
    )
