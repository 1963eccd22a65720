"""Shared fixtures for the ledger tests."""

import os
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from ledger.audit import AuditLogger
from ledger.config import get_settings
from ledger.models.transaction import Transaction
from ledger.services.storage import MemoryTransactionStorage
from ledger.store import LedgerStore


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Run every test in an empty directory with no LEDGER_* variables."""
    for name in list(os.environ):
        if name.startswith("LEDGER_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def audit_logger():
    """An AuditLogger writing to a mock structlog logger."""
    return AuditLogger(logger=MagicMock())


@pytest.fixture
def memory_storage():
    return MemoryTransactionStorage()


@pytest.fixture
def store(memory_storage, audit_logger):
    return LedgerStore(memory_storage, currency="USD", audit_logger=audit_logger)


@pytest.fixture
def sample_transactions():
    return [
        Transaction(
            id=1,
            amount=Decimal("100.00"),
            date=date(2024, 1, 1),
            description="Salary",
            currency="USD",
        ),
        Transaction(
            id=2,
            amount=Decimal("-20.5"),
            date=date(2024, 1, 2),
            description="Lunch",
            currency="USD",
        ),
        Transaction(
            id=3,
            amount=Decimal("125.50"),
            date=date(2024, 3, 15),
            description="Groceries",
            currency="EUR",
        ),
    ]
