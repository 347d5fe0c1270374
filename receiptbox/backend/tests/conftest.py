from pathlib import Path

import pytest

from app.ledger.coordinator import AppendCoordinator
from app.ledger.store import LedgerStore


@pytest.fixture
def ledger_path(tmp_path: Path) -> Path:
    return tmp_path / "receipts.xlsx"


@pytest.fixture
def store(ledger_path: Path) -> LedgerStore:
    return LedgerStore(ledger_path)


@pytest.fixture
def coordinator(store: LedgerStore) -> AppendCoordinator:
    """A started coordinator over a fresh ledger."""
    coordinator = AppendCoordinator(store)
    coordinator.start()
    return coordinator
