"""
Unit Tests for the append coordinator

Tests cover:
1. Startup state machine and fatal startup failures
2. Persist-then-accumulate on append
3. Total survives a restart
4. Concurrent submissions
"""

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from app.ledger.coordinator import AppendCoordinator, LedgerState
from app.ledger.entry import validate_entry
from app.ledger.exceptions import (
    LedgerNotReadyError,
    LedgerStartupError,
    LedgerStorageError,
)
from app.ledger.store import LedgerStore
from app.ledger.table import WorkbookTable

from helpers import LEDGER_YEAR, sheet_rows, write_rows


def _entry(raw_date, payee, amount):
    return validate_entry(raw_date, payee, amount, LEDGER_YEAR)


class TestStartup:
    """Tests for reaching READY."""

    def test_start_reaches_ready(self, store, ledger_path):
        coordinator = AppendCoordinator(store)
        assert coordinator.state == LedgerState.UNINITIALIZED

        result = coordinator.start()

        assert coordinator.state == LedgerState.READY
        assert result.total == Decimal("0.00")
        assert ledger_path.exists()

    def test_start_loads_existing_total(self, store, ledger_path):
        store.bootstrap()
        write_rows(ledger_path, "mar", {1: ("March 01, 2025", "Cafe A", 10.05)})

        coordinator = AppendCoordinator(store)
        coordinator.start()

        assert coordinator.total == Decimal("10.05")

    def test_unreadable_ledger_is_fatal(self, ledger_path):
        ledger_path.write_bytes(b"garbage")
        coordinator = AppendCoordinator(LedgerStore(ledger_path))

        with pytest.raises(LedgerStartupError):
            coordinator.start()
        assert coordinator.state != LedgerState.READY

    def test_uncreatable_ledger_is_fatal(self, ledger_path):
        ledger_path.mkdir()
        coordinator = AppendCoordinator(LedgerStore(ledger_path))

        with pytest.raises(LedgerStartupError):
            coordinator.start()

    def test_submit_before_start_rejected(self, store):
        coordinator = AppendCoordinator(store)

        with pytest.raises(LedgerNotReadyError):
            coordinator.submit(_entry("01-15", "Cafe A", "1.00"))


class TestSubmit:
    """Tests for recording entries."""

    def test_two_entries_same_month(self, coordinator, ledger_path):
        first = coordinator.submit(_entry("01-15", "Cafe A", "12.50"))
        second = coordinator.submit(_entry("01-20", "Cafe B", "7.49"))

        assert first.total == Decimal("12.50")
        assert second.total == Decimal("19.99")
        assert (first.placement.row, second.placement.row) == (1, 2)
        assert [row[1] for row in sheet_rows(ledger_path, "jan")] == ["Cafe A", "Cafe B"]

    def test_n_appends_sum_exactly(self, coordinator, ledger_path):
        amounts = ["0.10", "0.20", "0.30", "1.01", "-0.61", "99.99"]
        for i, amount in enumerate(amounts, 1):
            coordinator.submit(_entry(f"07-{i:02d}", f"Payee {i}", amount))

        assert coordinator.total == sum(Decimal(a) for a in amounts)
        assert len(sheet_rows(ledger_path, "jul")) == len(amounts)

    def test_storage_failure_keeps_total_and_state(self, coordinator, monkeypatch):
        coordinator.submit(_entry("01-15", "Cafe A", "12.50"))

        def failing_save(self):
            raise LedgerStorageError("disk full")

        monkeypatch.setattr(WorkbookTable, "save", failing_save)
        with pytest.raises(LedgerStorageError):
            coordinator.submit(_entry("01-16", "Cafe B", "5.00"))
        monkeypatch.undo()

        assert coordinator.total == Decimal("12.50")
        assert coordinator.state == LedgerState.READY

        # The lock was released and the service keeps working
        outcome = coordinator.submit(_entry("01-17", "Cafe C", "1.00"))
        assert outcome.total == Decimal("13.50")
        assert outcome.placement.row == 2


class TestRestart:
    """Tests for total consistency across process restarts."""

    def test_restart_recovers_incremental_total(self, coordinator, ledger_path):
        entries = [
            ("01-15", "Cafe A", "12.50"),
            ("02-31", "Bakery", "3.333"),
            ("03-01", "Refund", "-4.00"),
            ("12-24", "Market", "250.05"),
        ]
        for raw in entries:
            coordinator.submit(_entry(*raw))
        before = coordinator.total

        restarted = AppendCoordinator(LedgerStore(ledger_path))
        result = restarted.start()

        assert result.total == before == Decimal("261.88")
        assert result.rows_counted == len(entries)

    def test_large_amounts_survive_restart(self, coordinator, ledger_path):
        """Test that amounts past float precision reload without drift."""
        coordinator.submit(_entry("06-01", "Fleet", "12345678901234567.89"))
        coordinator.submit(_entry("06-02", "Cafe A", "0.01"))
        before = coordinator.total

        restarted = AppendCoordinator(LedgerStore(ledger_path))
        result = restarted.start()

        assert before == Decimal("12345678901234567.90")
        assert result.total == before
        assert sheet_rows(ledger_path, "jun")[0][2] == "12345678901234567.89"

    def test_recompute_picks_up_hand_edits(self, coordinator, ledger_path):
        coordinator.submit(_entry("01-15", "Cafe A", "12.50"))
        write_rows(ledger_path, "jan", {2: ("January 16, 2025", "Typed in", 2.5)})

        result = coordinator.recompute()

        assert result.total == Decimal("15.00")
        assert coordinator.total == Decimal("15.00")


class TestConcurrency:
    """Tests for concurrent submitters."""

    def test_concurrent_submits_lose_nothing(self, coordinator, ledger_path):
        entries = [
            _entry(f"{(i % 3) + 1:02d}-{(i % 28) + 1:02d}", f"Payee {i}", f"{i}.{i:02d}")
            for i in range(12)
        ]

        with ThreadPoolExecutor(max_workers=6) as pool:
            outcomes = list(pool.map(coordinator.submit, entries))

        expected = sum(e.amount for e in entries)
        assert coordinator.total == expected
        assert max(o.total for o in outcomes) == expected

        payees = []
        for sheet in ("jan", "feb", "mar"):
            payees.extend(row[1] for row in sheet_rows(ledger_path, sheet))
        assert sorted(payees) == sorted(e.payee for e in entries)

        placements = {(o.placement.partition, o.placement.row) for o in outcomes}
        assert len(placements) == len(entries)
