"""In-memory transaction storage, used by tests and throwaway sessions."""

from typing import Iterable, Iterator, Optional

from ledger.models.transaction import Transaction
from ledger.services.storage.interface import StorageError, TransactionStorageInterface


class MemoryTransactionStorage(TransactionStorageInterface):
    """
    Keeps the "stored" ledger as a list of transaction copies.

    Set ``fail_writes`` (or ``fail_reads``) to an error message to make the
    next writes (reads) raise ``StorageError``.
    """

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None):
        self._stored: list[Transaction] = [tx.model_copy() for tx in transactions or []]
        self.save_count = 0
        self.fail_writes: Optional[str] = None
        self.fail_reads: Optional[str] = None

    @property
    def location(self) -> str:
        return "<memory>"

    @property
    def stored(self) -> list[Transaction]:
        return [tx.model_copy() for tx in self._stored]

    def iter_transactions(self) -> Iterator[Transaction]:
        if self.fail_reads:
            raise StorageError(self.fail_reads)
        for tx in self._stored:
            yield tx.model_copy()

    def save_all(self, transactions: Iterable[Transaction]) -> None:
        if self.fail_writes:
            raise StorageError(self.fail_writes)
        self._stored = [tx.model_copy() for tx in transactions]
        self.save_count += 1
