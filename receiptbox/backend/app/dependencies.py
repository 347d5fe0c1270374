from fastapi import Request

from app.config import settings
from app.ledger.coordinator import AppendCoordinator
from app.ledger.store import LedgerStore


def build_coordinator() -> AppendCoordinator:
    """Create the process-wide coordinator for the configured ledger file."""
    store = LedgerStore(settings.LEDGER_PATH, backups=settings.LEDGER_BACKUPS)
    return AppendCoordinator(store)


def get_coordinator(request: Request) -> AppendCoordinator:
    """FastAPI dependency returning the coordinator started in lifespan."""
    return request.app.state.coordinator


def get_ledger_year() -> int:
    return settings.LEDGER_YEAR
