"""Offline ledger check.

Creates the month sheets if needed, rescans the ledger workbook and prints
the total, per-sheet row counts and any rows whose amount cannot be read.
Do not run while the server is writing to the same file.

Usage:
    cd receiptbox
    python scripts/recompute_total.py
    python scripts/recompute_total.py --ledger path/to/receipts.xlsx
"""

from __future__ import annotations

import argparse
import sys
from collections import Counter
from pathlib import Path

# Add backend to path so we can import app modules
SCRIPT_DIR = Path(__file__).resolve().parent
PROJECT_DIR = SCRIPT_DIR.parent
BACKEND_DIR = PROJECT_DIR / "backend"
sys.path.insert(0, str(BACKEND_DIR))

from app.config import settings
from app.ledger.coordinator import AppendCoordinator
from app.ledger.exceptions import LedgerStartupError
from app.ledger.store import LedgerStore
from app.utils.currency import format_amount


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--ledger", type=Path, default=settings.LEDGER_PATH)
    args = parser.parse_args(argv)

    store = LedgerStore(args.ledger)
    coordinator = AppendCoordinator(store)

    print(f"Reading ledger {args.ledger}...")
    try:
        result = coordinator.start()
    except LedgerStartupError as e:
        print(f"\nERROR: {e}")
        return 1

    rows_per_sheet = Counter(cell.partition for cell in store.iter_amount_cells())
    for partition, count in rows_per_sheet.items():
        print(f"  {partition}: {count} rows")

    if result.skipped:
        print()
        print(f"Warning: {len(result.skipped)} rows skipped (amount not a number):")
        for skipped in result.skipped:
            print(f"  {skipped.partition} row {skipped.row}: {skipped.value!r}")

    print()
    print("=" * 60)
    print(f"Total: {format_amount(result.total)} ({result.rows_counted} rows)")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
