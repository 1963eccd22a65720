"""
Record Codec

One transaction is stored as one line of comma-separated fields:

    id,amount,date,description,currency
    3,125.50,03.15.2024,Groceries,USD

Amounts use invariant notation (period as decimal separator, no grouping,
no exponent). Dates use MM.dd.yyyy. Fields are not quoted or escaped, so
descriptions and currencies must never contain a comma; the transaction
model rejects them.

A line that does not split into exactly five fields is not a record and is
dropped by ``decode_record``. A line that does split into five fields but
holds an unparseable value raises ``RecordFormatError``.
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import ValidationError

from ledger.models.transaction import Transaction
from ledger.services.storage.interface import RecordFormatError


FIELD_SEPARATOR = ","

RECORD_FIELDS = [
    "id",
    "amount",
    "date",
    "description",
    "currency",
]

DATE_FORMAT = "%m.%d.%Y"

_AMOUNT_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")
_DATE_PATTERN = re.compile(r"^\d{2}\.\d{2}\.\d{4}$")
_ID_PATTERN = re.compile(r"^[+-]?\d+$")


# =============================================================================
# FIELD FORMATS
# =============================================================================

def format_amount(amount: Decimal) -> str:
    """Invariant decimal notation: ``-1234.50``, never ``-1.2345E+3``."""
    return format(amount, "f")


def parse_amount(text: str) -> Decimal:
    """
    Parse an invariant decimal amount.

    Raises:
        ValueError: If ``text`` is not a plain signed decimal number
    """
    candidate = text.strip()
    if not _AMOUNT_PATTERN.match(candidate):
        raise ValueError(f"Invalid amount: {text!r}")
    try:
        return Decimal(candidate)
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {text!r}")


def format_date(value: date) -> str:
    # strftime does not zero-pad years below 1000 on every platform
    return f"{value.month:02d}.{value.day:02d}.{value.year:04d}"


def format_short_date(value: date) -> str:
    return f"{value.month:02d}/{value.day:02d}/{value.year:04d}"


def parse_date(text: str) -> date:
    """
    Parse an exact ``MM.dd.yyyy`` date.

    Raises:
        ValueError: If the format does not match or the date does not exist
    """
    candidate = text.strip()
    if not _DATE_PATTERN.match(candidate):
        raise ValueError(f"Invalid date: {text!r}, expected MM.DD.YYYY")
    try:
        return datetime.strptime(candidate, DATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"Invalid date: {text!r}")


def parse_id(text: str) -> int:
    """
    Parse a decimal integer ID.

    Raises:
        ValueError: If ``text`` is not an integer
    """
    candidate = text.strip()
    if not _ID_PATTERN.match(candidate):
        raise ValueError(f"Invalid ID: {text!r}")
    return int(candidate)


# =============================================================================
# RECORDS
# =============================================================================

def encode_record(transaction: Transaction) -> str:
    """Encode a transaction as a record line, without the line terminator."""
    return FIELD_SEPARATOR.join([
        str(transaction.id),
        format_amount(transaction.amount),
        format_date(transaction.date),
        transaction.description,
        transaction.currency,
    ])


def split_record(line: str) -> list[str]:
    """Strip the line terminator and split a record line into its fields."""
    return line.rstrip("\r\n").split(FIELD_SEPARATOR)


def decode_record(line: str, line_number: Optional[int] = None) -> Optional[Transaction]:
    """
    Decode a record line.

    Returns None when the line does not have exactly five fields.

    Raises:
        RecordFormatError: If a five-field line holds invalid values
    """
    parts = split_record(line)
    if len(parts) != len(RECORD_FIELDS):
        return None

    raw_id, raw_amount, raw_date, description, currency = parts
    try:
        return Transaction(
            id=parse_id(raw_id),
            amount=parse_amount(raw_amount),
            date=parse_date(raw_date),
            description=description,
            currency=currency,
        )
    except ValidationError as e:
        raise RecordFormatError(_first_error(e), line_number=line_number) from e
    except ValueError as e:
        raise RecordFormatError(str(e), line_number=line_number) from e


def _first_error(error: ValidationError) -> str:
    details = error.errors()
    if not details:
        return str(error)
    first = details[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid value')}"


# =============================================================================
# DISPLAY
# =============================================================================

_BLOCK_RULE = "=" * 56
_BLOCK_HEADER = "|  ID: |     Amount:   |     Date:     |  Description: |"
_BLOCK_DIVIDER = "-------|---------------|---------------|---------------|"


def render_block(transaction: Transaction) -> str:
    """
    Render a transaction as a framed fixed-width table block.

    Columns are padded, not truncated; long values push the row wider.
    """
    id_column = f"|  {transaction.id}  ".ljust(5)
    amount_column = f"|  {format_amount(transaction.amount)} {transaction.currency} ".ljust(15)
    date_column = f"|  {format_short_date(transaction.date)}".ljust(15)
    description_column = f"|  {transaction.description}     |".ljust(30)

    return "\n".join([
        "",
        _BLOCK_RULE,
        _BLOCK_HEADER,
        _BLOCK_DIVIDER,
        f"{id_column} {amount_column} {date_column} {description_column}  ",
        _BLOCK_RULE,
    ])
