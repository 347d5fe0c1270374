"""Start the receiptbox ledger server.

Usage:
    cd receiptbox
    python scripts/run_server.py            # entries dated this year
    python scripts/run_server.py 2024       # entries dated 2024
    python scripts/run_server.py --previous-year
"""

from __future__ import annotations

import argparse
import datetime
import logging
import sys
from pathlib import Path

import uvicorn

# Add backend to path so we can import app modules
SCRIPT_DIR = Path(__file__).resolve().parent
PROJECT_DIR = SCRIPT_DIR.parent
BACKEND_DIR = PROJECT_DIR / "backend"
sys.path.insert(0, str(BACKEND_DIR))

from app.config import settings


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Receiptbox ledger server")
    parser.add_argument(
        "year",
        nargs="?",
        help="Year stamped on entries (default: current year)",
    )
    parser.add_argument(
        "--previous-year",
        action="store_true",
        help="Stamp entries with last year",
    )
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    if args.year is not None:
        try:
            settings.LEDGER_YEAR = int(args.year)
        except ValueError:
            sys.exit(f"Cannot convert year '{args.year}' to a number")
    elif args.previous_year:
        settings.LEDGER_YEAR = datetime.date.today().year - 1

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print(f"Running receiptbox ledger on port {args.port}")

    from app.main import app

    uvicorn.run(app, host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
