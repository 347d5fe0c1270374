"""Ledger workbook constants and layout configuration.

The ledger is one workbook with a sheet per calendar month (jan..dec)
plus the workbook's default "Sheet1", which is only written to when a
month cannot be resolved. Every month sheet has three columns:
A=date display string, B=payee, C=amount.
"""

from typing import Final


MONTH_PARTITIONS: Final[tuple[str, ...]] = (
    "jan", "feb", "mar", "apr", "may", "jun",
    "jul", "aug", "sep", "oct", "nov", "dec",
)

FALLBACK_PARTITION: Final[str] = "Sheet1"

# Column indices (1-indexed)
DATE_COL: Final[int] = 1    # A
PAYEE_COL: Final[int] = 2   # B
AMOUNT_COL: Final[int] = 3  # C

# Display widths applied when a month sheet is created
COLUMN_WIDTHS: Final[dict[str, float]] = {
    "A": 20,
    "B": 32,
    "C": 10,
}


def get_partition_name(month: int) -> str:
    """Get the sheet name for a month number, or the fallback sheet."""
    if 1 <= month <= 12:
        return MONTH_PARTITIONS[month - 1]
    return FALLBACK_PARTITION


def known_partitions() -> tuple[str, ...]:
    """All sheets that hold ledger rows, in scan order."""
    return MONTH_PARTITIONS + (FALLBACK_PARTITION,)
