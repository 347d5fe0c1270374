"""Entry validation.

Turns the three raw strings a receiptbox client sends (``mm-dd`` date,
payee, amount) into an immutable :class:`Entry`. Pure: no I/O, no locking.
"""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from decimal import Decimal

from app.ledger.exceptions import EntryValidationError, ValidationReason
from app.utils.currency import parse_cents
from app.utils.date_helpers import format_display_date, normalize_date

_INT_RE = re.compile(r"[+-]?\d+")


@dataclass(frozen=True)
class Entry:
    """A validated expense record.

    Day is only range-checked (1-31), never against the month's length,
    so ``year``/``month``/``day`` keep what was submitted.
    """

    year: int
    month: int
    day: int
    payee: str
    amount: Decimal

    @property
    def date(self) -> datetime.date:
        return normalize_date(self.year, self.month, self.day)

    @property
    def display_date(self) -> str:
        return format_display_date(self.year, self.month, self.day)


def _parse_int(component: str) -> int | None:
    if not _INT_RE.fullmatch(component):
        return None
    return int(component)


def _parse_month_day(raw_date: str) -> tuple[int, int]:
    components = raw_date.split("-")
    if len(components) != 2:
        raise EntryValidationError(ValidationReason.BAD_DATE_FORMAT)

    month = _parse_int(components[0])
    if month is None or not 1 <= month <= 12:
        raise EntryValidationError(ValidationReason.BAD_DATE_FORMAT)

    day = _parse_int(components[1])
    if day is None or not 1 <= day <= 31:
        raise EntryValidationError(ValidationReason.BAD_DATE_FORMAT)

    return month, day


def validate_entry(
    raw_date: str,
    payee: str,
    raw_amount: str,
    year: int,
) -> Entry:
    """Validate a raw record and build an Entry.

    Args:
        raw_date: Date as ``mm-dd``.
        payee: Display name, stored as given.
        raw_amount: Decimal amount, rounded half-even to cents. Negative
            values (refunds) are allowed; values too large to hold in cents
            are rejected.
        year: Ambient ledger year.

    Raises:
        EntryValidationError: AMOUNT_UNPARSEABLE or BAD_DATE_FORMAT. The
            amount is checked first.
    """
    amount = parse_cents(raw_amount)
    if amount is None:
        raise EntryValidationError(ValidationReason.AMOUNT_UNPARSEABLE)

    month, day = _parse_month_day(raw_date)

    return Entry(
        year=year,
        month=month,
        day=day,
        payee=payee,
        amount=amount,
    )
