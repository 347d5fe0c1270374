"""Ledger error hierarchy."""

from __future__ import annotations

import enum


class ValidationReason(str, enum.Enum):
    BAD_DATE_FORMAT = "bad_date_format"
    AMOUNT_UNPARSEABLE = "amount_unparseable"

    @property
    def message(self) -> str:
        return _REASON_MESSAGES[self]


_REASON_MESSAGES = {
    ValidationReason.BAD_DATE_FORMAT: "Invalid date format. Please use mm-dd",
    ValidationReason.AMOUNT_UNPARSEABLE: "Cannot read Amount",
}


class LedgerError(Exception):
    """Base class for all ledger errors."""


class EntryValidationError(LedgerError):
    """A submitted record could not be turned into an Entry."""

    def __init__(self, reason: ValidationReason) -> None:
        super().__init__(reason.message)
        self.reason = reason

    @property
    def message(self) -> str:
        return self.reason.message


class LedgerStorageError(LedgerError):
    """The ledger workbook could not be opened, created or saved."""


class LedgerStartupError(LedgerStorageError):
    """The ledger could not be initialised; the service must not serve."""


class LedgerNotReadyError(LedgerError):
    """An append was attempted before the ledger finished starting up."""
