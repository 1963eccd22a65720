"""
Storage Services Package

Provides the abstract storage interface, the record codec and the
concrete backends (flat file, in-memory).
"""

from ledger.services.storage.interface import (
    RecordFormatError,
    StorageError,
    TransactionStorageInterface,
)
from ledger.services.storage.codec import (
    DATE_FORMAT,
    FIELD_SEPARATOR,
    RECORD_FIELDS,
    decode_record,
    encode_record,
    format_amount,
    format_date,
    parse_amount,
    parse_date,
    parse_id,
    render_block,
)
from ledger.services.storage.file_storage import FileTransactionStorage
from ledger.services.storage.memory import MemoryTransactionStorage

__all__ = [
    # Interfaces
    "TransactionStorageInterface",
    # Exceptions
    "RecordFormatError",
    "StorageError",
    # Record codec
    "DATE_FORMAT",
    "FIELD_SEPARATOR",
    "RECORD_FIELDS",
    "decode_record",
    "encode_record",
    "format_amount",
    "format_date",
    "parse_amount",
    "parse_date",
    "parse_id",
    "render_block",
    # Implementations
    "FileTransactionStorage",
    "MemoryTransactionStorage",
]
