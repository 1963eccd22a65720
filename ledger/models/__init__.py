"""
Data Models Package

This package contains all Pydantic models used in the ledger.
All data flowing through the system must conform to these schemas.
"""

from ledger.models.transaction import (
    FORBIDDEN_TEXT_CHARS,
    ParseResult,
    Transaction,
    check_record_text,
)
from ledger.models.audit import (
    EventSeverity,
    LedgerEvent,
    LedgerEventBuilder,
    LedgerEventType,
)

__all__ = [
    # Transaction models
    "FORBIDDEN_TEXT_CHARS",
    "ParseResult",
    "check_record_text",
    "Transaction",
    # Audit models
    "EventSeverity",
    "LedgerEvent",
    "LedgerEventBuilder",
    "LedgerEventType",
]
