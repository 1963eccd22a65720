"""Tests for the ledger store."""

import pytest
from datetime import date
from decimal import Decimal

from ledger.models.audit import LedgerEventType
from ledger.models.transaction import Transaction
from ledger.services.storage import FileTransactionStorage, MemoryTransactionStorage, file_storage
from ledger.store import LedgerStore, create_ledger_store


def logged_event_types(audit_logger):
    return [c.kwargs["event_type"] for c in audit_logger._logger.method_calls]


class TestAdd:
    """Tests for adding transactions."""

    def test_first_transaction_gets_id_one(self, store):
        """Add (100.00, 01.01.2024, "Salary") in USD: one record, id 1, balance 100.00."""
        tx, error = store.add(Decimal("100.00"), date(2024, 1, 1), "Salary")

        assert error is None
        assert tx.id == 1
        assert tx.currency == "USD"
        assert len(store) == 1
        assert store.balance() == Decimal("100.00")

    def test_ids_are_unique_and_increasing(self, store):
        ids = [store.add(Decimal(i), date(2024, 1, 1), f"T{i}")[0].id for i in range(1, 6)]
        assert ids == [1, 2, 3, 4, 5]
        assert store.next_id == 6

    def test_every_add_is_saved(self, store, memory_storage):
        store.add(Decimal("1"), date(2024, 1, 1), "A")
        store.add(Decimal("2"), date(2024, 1, 2), "B")
        assert memory_storage.save_count == 2
        assert memory_storage.stored == store.list_transactions()

    def test_comma_in_description_is_rejected(self, store, memory_storage):
        with pytest.raises(ValueError):
            store.add(Decimal("1"), date(2024, 1, 1), "a, b")
        assert len(store) == 0
        assert store.next_id == 1
        assert memory_storage.save_count == 0

    def test_save_failure_is_reported_and_record_kept(self, store, memory_storage, audit_logger):
        memory_storage.fail_writes = "disk full"

        tx, error = store.add(Decimal("5"), date(2024, 1, 1), "Tea")

        assert "disk full" in error
        assert store.list_transactions() == [tx]
        assert store.next_id == 2
        assert "save_failed" in logged_event_types(audit_logger)

    def test_add_is_audited(self, store, audit_logger):
        store.add(Decimal("5"), date(2024, 1, 1), "Tea")
        kwargs = audit_logger._logger.info.call_args.kwargs
        assert kwargs["event_type"] == "transaction_added"
        assert kwargs["transaction_id"] == 1
        assert kwargs["details"] == {"amount": "5", "currency": "USD"}


class TestDelete:
    """Tests for deleting transactions."""

    def test_delete_then_balance(self, store):
        """Add 50 (id 1), add -20 (id 2), delete 1: balance -20, only id 2 left."""
        store.add(Decimal("50"), date(2024, 1, 1), "In")
        store.add(Decimal("-20"), date(2024, 1, 2), "Out")

        found, error = store.delete(1)

        assert found is True
        assert error is None
        assert store.balance() == Decimal("-20")
        assert [tx.id for tx in store.list_transactions()] == [2]

    def test_delete_missing_id_changes_nothing(self, store, memory_storage, audit_logger):
        store.add(Decimal("50"), date(2024, 1, 1), "In")
        before = store.list_transactions()
        saves = memory_storage.save_count

        found, error = store.delete(99)

        assert found is False
        assert error is None
        assert store.list_transactions() == before
        assert store.next_id == 2
        assert memory_storage.save_count == saves
        assert logged_event_types(audit_logger)[-1] == LedgerEventType.DELETE_NOT_FOUND.value

    def test_deleted_ids_are_not_reused(self, store):
        store.add(Decimal("1"), date(2024, 1, 1), "A")
        store.add(Decimal("2"), date(2024, 1, 1), "B")
        store.delete(2)
        tx, _ = store.add(Decimal("3"), date(2024, 1, 1), "C")
        assert tx.id == 3

    def test_delete_removes_first_match_only(self, audit_logger):
        duplicate = [
            Transaction(id=1, amount=Decimal("1"), date=date(2024, 1, 1), currency="USD"),
            Transaction(id=1, amount=Decimal("2"), date=date(2024, 1, 1), currency="USD"),
        ]
        store = LedgerStore(MemoryTransactionStorage(duplicate), audit_logger=audit_logger)
        store.delete(1)
        assert [tx.amount for tx in store.list_transactions()] == [Decimal("2")]

    def test_delete_save_failure_is_reported(self, store, memory_storage):
        store.add(Decimal("1"), date(2024, 1, 1), "A")
        memory_storage.fail_writes = "read-only"

        found, error = store.delete(1)

        assert found is True
        assert "read-only" in error
        assert len(store) == 0


class TestBalanceAndCurrency:

    def test_empty_balance_is_zero(self, store):
        assert store.balance() == Decimal("0")

    def test_balance_ignores_currency_labels(self, store):
        store.add(Decimal("10.10"), date(2024, 1, 1), "A")
        store.set_currency("EUR")
        store.add(Decimal("0.20"), date(2024, 1, 1), "B")
        assert store.balance() == Decimal("10.30")

    def test_currency_change_is_not_retroactive(self, store):
        first, _ = store.add(Decimal("1"), date(2024, 1, 1), "A")
        store.set_currency("EUR")
        second, _ = store.add(Decimal("1"), date(2024, 1, 1), "B")

        assert store.get_currency() == "EUR"
        assert [tx.currency for tx in store.list_transactions()] == ["USD", "EUR"]
        assert first.currency == "USD"
        assert second.currency == "EUR"

    def test_currency_with_comma_is_rejected(self, store):
        with pytest.raises(ValueError):
            store.set_currency("US,D")
        assert store.get_currency() == "USD"

    def test_render_transactions(self, store):
        store.add(Decimal("125.50"), date(2024, 3, 15), "Groceries")
        blocks = store.render_transactions()
        assert len(blocks) == 1
        assert "125.50 USD" in blocks[0]


class TestLoad:
    """Tests for loading the stored ledger."""

    def test_loads_stored_transactions(self, sample_transactions, audit_logger):
        store = LedgerStore(MemoryTransactionStorage(sample_transactions), audit_logger=audit_logger)
        assert store.list_transactions() == sample_transactions
        assert store.next_id == 4
        assert store.load_error is None
        assert "ledger_loaded" in logged_event_types(audit_logger)

    def test_next_id_follows_last_record(self, audit_logger):
        """The default policy continues from the last stored record, not the highest ID."""
        out_of_order = [
            Transaction(id=5, amount=Decimal("1"), date=date(2024, 1, 1), currency="USD"),
            Transaction(id=2, amount=Decimal("1"), date=date(2024, 1, 1), currency="USD"),
        ]
        store = LedgerStore(MemoryTransactionStorage(out_of_order), audit_logger=audit_logger)
        assert store.next_id == 3

    def test_next_id_max_policy(self, audit_logger):
        out_of_order = [
            Transaction(id=5, amount=Decimal("1"), date=date(2024, 1, 1), currency="USD"),
            Transaction(id=2, amount=Decimal("1"), date=date(2024, 1, 1), currency="USD"),
        ]
        store = LedgerStore(
            MemoryTransactionStorage(out_of_order),
            next_id_policy="max",
            audit_logger=audit_logger,
        )
        assert store.next_id == 6

    def test_read_failure_is_reported(self, audit_logger):
        storage = MemoryTransactionStorage()
        storage.fail_reads = "permission denied"

        store = LedgerStore(storage, audit_logger=audit_logger)

        assert "permission denied" in store.load_error
        assert len(store) == 0
        assert store.next_id == 1
        assert "load_failed" in logged_event_types(audit_logger)

    def test_permission_error_on_file_is_reported(self, tmp_path, monkeypatch, audit_logger):
        def denied(*args, **kwargs):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(file_storage, "open", denied, raising=False)

        store = LedgerStore(FileTransactionStorage(tmp_path / "ledger.txt"), audit_logger=audit_logger)

        assert "Could not load transactions" in store.load_error
        assert len(store) == 0

    def test_malformed_line_skipped_silently(self, tmp_path, audit_logger):
        path = tmp_path / "ledger.txt"
        path.write_text("1,10.00,01.01.2024,Broken\n2,5.00,01.02.2024,Tea,USD\n", encoding="utf-8")

        store = LedgerStore(FileTransactionStorage(path), audit_logger=audit_logger)

        assert [tx.id for tx in store.list_transactions()] == [2]
        assert store.load_error is None
        assert "record_skipped" in logged_event_types(audit_logger)

    def test_bad_record_keeps_partial_ledger(self, tmp_path, audit_logger):
        path = tmp_path / "ledger.txt"
        path.write_text(
            "1,10.00,01.01.2024,Ok,USD\n"
            "2,10.00,13.45.2024,Bad date,USD\n"
            "3,10.00,01.03.2024,Lost,USD\n",
            encoding="utf-8",
        )

        store = LedgerStore(FileTransactionStorage(path), audit_logger=audit_logger)

        assert [tx.id for tx in store.list_transactions()] == [1]
        assert "line 2" in store.load_error
        assert store.next_id == 2

    def test_reload_matches_saved_ledger(self, tmp_path, audit_logger):
        path = tmp_path / "ledger.txt"
        store = LedgerStore(FileTransactionStorage(path), currency="USD", audit_logger=audit_logger)
        store.add(Decimal("100.00"), date(2024, 1, 1), "Salary")
        store.add(Decimal("-20.25"), date(2024, 1, 2), "")
        store.set_currency("EUR")
        store.add(Decimal("3"), date(2024, 2, 29), "Coffee")

        reloaded = LedgerStore(FileTransactionStorage(path), audit_logger=audit_logger)

        assert reloaded.list_transactions() == store.list_transactions()
        assert reloaded.next_id == store.next_id
        assert reloaded.balance() == store.balance()

    def test_reload_keeps_early_year_dates(self, tmp_path, audit_logger):
        """A year below 1000 is written with four digits and reads back."""
        path = tmp_path / "ledger.txt"
        store = LedgerStore(FileTransactionStorage(path), audit_logger=audit_logger)
        store.add(Decimal("1"), date(999, 1, 1), "Old")
        store.add(Decimal("2"), date(2024, 1, 1), "New")

        reloaded = LedgerStore(FileTransactionStorage(path), audit_logger=audit_logger)

        assert reloaded.load_error is None
        assert reloaded.list_transactions() == store.list_transactions()
        assert path.read_text(encoding="utf-8").splitlines()[0] == "1,1,01.01.0999,Old,UAH"


class TestFactory:

    def test_create_ledger_store_uses_settings(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LEDGER_FILE_PATH", str(tmp_path / "env.txt"))
        monkeypatch.setenv("LEDGER_DEFAULT_CURRENCY", "eur")

        store = create_ledger_store()
        store.add(Decimal("1"), date(2024, 1, 1), "A")

        assert store.get_currency() == "EUR"
        assert (tmp_path / "env.txt").read_text(encoding="utf-8") == "1,1,01.01.2024,A,EUR\n"

    def test_create_ledger_store_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LEDGER_DEFAULT_CURRENCY", "EUR")
        store = create_ledger_store(file_path=tmp_path / "cli.txt", currency="usd")
        assert store.get_currency() == "USD"
