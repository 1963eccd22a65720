"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the ledger store independent of the file format
2. Use in-memory storage for testing
3. Swap the flat file for something else later

The interface is intentionally tiny: the ledger is always read in full
once and written in full after every change.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Optional

from ledger.models.transaction import Transaction


class TransactionStorageInterface(ABC):
    """
    Abstract interface for transaction storage.

    Any storage implementation must implement these methods.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable location of the stored ledger (used in messages)."""
        pass

    @abstractmethod
    def iter_transactions(self) -> Iterator[Transaction]:
        """
        Yield stored transactions in stored order.

        Records that do not have the expected shape are skipped and
        reported through ``skipped_lines``. Yields nothing when no
        ledger has been stored yet.

        Raises:
            RecordFormatError: If a well-shaped record has invalid contents.
                Transactions yielded before the error stay valid.
            StorageError: If the ledger cannot be read
        """
        pass

    @abstractmethod
    def save_all(self, transactions: Iterable[Transaction]) -> None:
        """
        Replace the stored ledger with ``transactions``.

        Raises:
            StorageError: If the ledger cannot be written
        """
        pass

    @property
    def skipped_lines(self) -> list[tuple[int, int]]:
        """``(line_number, field_count)`` of records skipped by the last read."""
        return []


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class RecordFormatError(StorageError):
    """A stored record has the right shape but unreadable contents."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
