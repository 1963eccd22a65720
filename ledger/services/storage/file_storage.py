"""
Flat File Storage Implementation

DESIGN DECISION: The ledger lives in a single plain text file because:
1. The user can read and back it up without any tool
2. No database setup required
3. A personal ledger stays small

TRADEOFFS:
- The whole file is rewritten on every change (fine at this scale)
- No locking; the last writer wins
- Optional write-then-rename keeps a crash from leaving half a file

The implementation follows the abstract interface, so the ledger store
never sees file handles or record lines.
"""

import codecs
import os
import tempfile
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from ledger.config import get_settings
from ledger.models.transaction import Transaction
from ledger.services.storage.codec import decode_record, encode_record, split_record
from ledger.services.storage.interface import (
    RecordFormatError,
    StorageError,
    TransactionStorageInterface,
)


class FileTransactionStorage(TransactionStorageInterface):
    """
    Flat file implementation of transaction storage.

    Transactions are stored one record per line, newline terminated.
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        encoding: Optional[str] = None,
        atomic_writes: Optional[bool] = None,
    ):
        """
        Initialize file storage.

        Args:
            path: Ledger file. Defaults to ``LEDGER_FILE_PATH``.
            encoding: File encoding. Defaults to ``LEDGER_FILE_ENCODING``.
            atomic_writes: Write through a temporary file and rename.
                          Defaults to ``LEDGER_ATOMIC_WRITES``.
        """
        settings = get_settings().storage
        self._path = Path(path) if path is not None else settings.file_path
        self._encoding = encoding or settings.file_encoding
        self._atomic_writes = settings.atomic_writes if atomic_writes is None else atomic_writes
        self._skipped: list[tuple[int, int]] = []

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    @property
    def skipped_lines(self) -> list[tuple[int, int]]:
        return list(self._skipped)

    def iter_transactions(self) -> Iterator[Transaction]:
        """Read the ledger file lazily, one record at a time."""
        self._skipped = []
        try:
            with open(self._path, "r", encoding=self._read_encoding(), newline="") as f:
                for line_number, line in enumerate(f, start=1):
                    transaction = decode_record(line, line_number=line_number)
                    if transaction is None:
                        self._skipped.append((line_number, len(split_record(line))))
                        continue
                    yield transaction
        except FileNotFoundError:
            return
        except RecordFormatError:
            raise
        except (OSError, UnicodeDecodeError, LookupError) as e:
            raise StorageError(f"Failed to read {self._path}: {e}") from e

    def _read_encoding(self) -> str:
        # Drops a leading byte order mark left by Windows editors
        if codecs.lookup(self._encoding).name == "utf-8":
            return "utf-8-sig"
        return self._encoding

    def save_all(self, transactions: Iterable[Transaction]) -> None:
        """Rewrite the ledger file with every transaction."""
        lines = [encode_record(tx) + "\n" for tx in transactions]
        try:
            if self._atomic_writes:
                self._write_atomic(lines)
            else:
                with open(self._path, "w", encoding=self._encoding, newline="") as f:
                    f.writelines(lines)
        except (OSError, LookupError) as e:
            raise StorageError(f"Failed to write {self._path}: {e}") from e

    def _write_atomic(self, lines: list[str]) -> None:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding=self._encoding, newline="") as f:
                f.writelines(lines)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
        except (OSError, LookupError):
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

    def __repr__(self) -> str:
        return f"FileTransactionStorage(path={str(self._path)!r})"
