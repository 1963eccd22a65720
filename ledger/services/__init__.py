"""Services package."""

from ledger.services.storage import (
    FileTransactionStorage,
    MemoryTransactionStorage,
    RecordFormatError,
    StorageError,
    TransactionStorageInterface,
)

__all__ = [
    # Storage services
    "FileTransactionStorage",
    "MemoryTransactionStorage",
    "RecordFormatError",
    "StorageError",
    "TransactionStorageInterface",
]
