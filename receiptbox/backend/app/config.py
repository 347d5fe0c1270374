import datetime
import os
from pathlib import Path


def _default_year() -> int:
    """Ambient ledger year: explicit override, else this (or last) year."""
    explicit = os.getenv("LEDGER_YEAR")
    if explicit:
        return int(explicit)
    year = datetime.date.today().year
    if os.getenv("LEDGER_PREVIOUS_YEAR", "false").lower() == "true":
        return year - 1
    return year


class Settings:
    """Application settings with environment variable overrides."""

    APP_NAME: str = "Receiptbox Ledger"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Paths
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = Path(os.getenv("RECEIPTBOX_DATA_DIR", str(BASE_DIR / "data")))
    LEDGER_PATH: Path = Path(
        os.getenv("LEDGER_PATH", str(DATA_DIR / "receipts.xlsx"))
    )

    # Copy the workbook to <ledger dir>/backups before every append
    LEDGER_BACKUPS: bool = os.getenv("LEDGER_BACKUPS", "false").lower() == "true"

    # Year stamped on entries; clients only send mm-dd
    LEDGER_YEAR: int = _default_year()

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3885"))


settings = Settings()
