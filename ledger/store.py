"""
Ledger Store

This module owns the ledger while the program runs:
- the transactions, in insertion order
- the next ID to hand out
- the current currency label for new transactions

Every change is followed by a full rewrite of the stored ledger.

DESIGN DECISION: Storage failures never escape the store.
Each operation returns an error message (or None) alongside its result,
so the console can tell the user and carry on with the in-memory state.
"""

import datetime
from decimal import Decimal
from pathlib import Path
from typing import Literal, Optional, Union

from ledger.audit import AuditLogger
from ledger.config import get_settings
from ledger.models.audit import LedgerEventBuilder
from ledger.models.transaction import Transaction, check_record_text
from ledger.services.storage import (
    FileTransactionStorage,
    StorageError,
    TransactionStorageInterface,
    format_amount,
    render_block,
)


NextIdPolicy = Literal["last", "max"]


class LedgerStore:
    """
    In-memory ledger backed by a storage implementation.

    The stored ledger is read once, when the store is created. A read error
    leaves whatever was read before it in the ledger and is kept in
    ``load_error``.
    """

    def __init__(
        self,
        storage: TransactionStorageInterface,
        currency: str = "UAH",
        next_id_policy: NextIdPolicy = "last",
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Initialize the store and load the stored ledger.

        Args:
            storage: Where transactions are read from and written to
            currency: Currency label for new transactions
            next_id_policy: After loading, continue from the 'last' stored
                           record's ID or from the 'max' stored ID
            audit_logger: Ledger event logger (a local one if None)
        """
        self._storage = storage
        self._currency = currency
        self._next_id_policy = next_id_policy
        self._audit_logger = audit_logger or AuditLogger()
        self._transactions: list[Transaction] = []
        self._next_id = 1
        self.load_error: Optional[str] = self.load()

    # ------------------------------------------------------------------
    # Loading and saving
    # ------------------------------------------------------------------

    def load(self) -> Optional[str]:
        """
        Replace the in-memory ledger with the stored one.

        Returns an error message if reading stopped early, else None.
        """
        self._transactions = []
        self._next_id = 1
        error = None

        try:
            for transaction in self._storage.iter_transactions():
                self._transactions.append(transaction)
        except StorageError as e:
            error = f"Could not load transactions: {e}"
            self._audit_logger.log(LedgerEventBuilder.load_failed(
                path=self._storage.location,
                error_message=str(e),
                loaded_count=len(self._transactions),
            ))

        for line_number, field_count in self._storage.skipped_lines:
            self._audit_logger.log(LedgerEventBuilder.record_skipped(
                path=self._storage.location,
                line_number=line_number,
                field_count=field_count,
            ))

        if self._transactions:
            if self._next_id_policy == "max":
                self._next_id = max(tx.id for tx in self._transactions) + 1
            else:
                # Can repeat an ID if records are not stored in ID order
                self._next_id = self._transactions[-1].id + 1

        if error is None:
            self._audit_logger.log(LedgerEventBuilder.ledger_loaded(
                path=self._storage.location,
                record_count=len(self._transactions),
                skipped_count=len(self._storage.skipped_lines),
                next_id=self._next_id,
            ))
        return error

    def _save(self) -> Optional[str]:
        try:
            self._storage.save_all(self._transactions)
        except StorageError as e:
            self._audit_logger.log(LedgerEventBuilder.save_failed(
                path=self._storage.location,
                error_message=str(e),
                record_count=len(self._transactions),
            ))
            return f"Could not save transactions: {e}"
        return None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def add(
        self,
        amount: Decimal,
        date: datetime.date,
        description: str,
    ) -> tuple[Transaction, Optional[str]]:
        """
        Record a new transaction in the current currency and save the ledger.

        Returns:
            (transaction, error) - error is None when the save succeeded.
            The transaction stays in the ledger either way.

        Raises:
            ValueError: If the description cannot be stored (comma, line break)
        """
        transaction = Transaction(
            id=self._next_id,
            amount=amount,
            date=date,
            description=description,
            currency=self._currency,
        )
        self._next_id += 1
        self._transactions.append(transaction)

        self._audit_logger.log(LedgerEventBuilder.transaction_added(
            transaction_id=transaction.id,
            amount=format_amount(transaction.amount),
            currency=transaction.currency,
        ))
        return transaction, self._save()

    def delete(self, transaction_id: int) -> tuple[bool, Optional[str]]:
        """
        Remove the first transaction with ``transaction_id`` and save the ledger.

        Returns:
            (found, error) - found is False when no transaction has that ID,
            in which case nothing is saved.
        """
        for index, transaction in enumerate(self._transactions):
            if transaction.id == transaction_id:
                del self._transactions[index]
                self._audit_logger.log(
                    LedgerEventBuilder.transaction_deleted(transaction_id)
                )
                return True, self._save()

        self._audit_logger.log(LedgerEventBuilder.delete_not_found(transaction_id))
        return False, None

    def list_transactions(self) -> list[Transaction]:
        """Transactions in insertion order."""
        return list(self._transactions)

    def render_transactions(self) -> list[str]:
        """Each transaction as a fixed-width display block."""
        return [render_block(tx) for tx in self._transactions]

    def balance(self) -> Decimal:
        """Sum of all amounts, regardless of their currency labels."""
        return sum((tx.amount for tx in self._transactions), Decimal("0"))

    def set_currency(self, currency: str) -> None:
        """
        Use ``currency`` for transactions added from now on.

        Raises:
            ValueError: If the label cannot be stored (comma, line break)
        """
        check_record_text(currency, "Currency")
        old = self._currency
        self._currency = currency
        self._audit_logger.log(LedgerEventBuilder.currency_changed(old, currency))

    def get_currency(self) -> str:
        return self._currency

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._transactions)


def create_ledger_store(
    file_path: Optional[Union[str, Path]] = None,
    currency: Optional[str] = None,
) -> LedgerStore:
    """
    Factory function to create a file-backed ledger store from settings.

    Args:
        file_path: Ledger file, overriding ``LEDGER_FILE_PATH``
        currency: Starting currency, overriding ``LEDGER_DEFAULT_CURRENCY``

    Returns:
        A loaded store; check ``load_error`` before use.
    """
    ledger_settings = get_settings().ledger
    storage = FileTransactionStorage(path=file_path)
    return LedgerStore(
        storage=storage,
        currency=(currency or ledger_settings.default_currency).strip().upper(),
        next_id_policy=ledger_settings.next_id_policy,
        audit_logger=AuditLogger(),
    )
