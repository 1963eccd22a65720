"""
Audit Models for the Personal Finance Ledger

Every change to the ledger, and every storage problem, is described by a
structured event. This provides:
1. Traceability of what happened to the ledger file
2. Debugging information when loads or saves go wrong
3. A record of silently skipped lines

DESIGN DECISION: Events are plain data. Writing them out is the
audit logger's job.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class LedgerEventType(str, Enum):
    """
    Types of events we audit.
    """
    # Loading
    LEDGER_LOADED = "ledger_loaded"
    RECORD_SKIPPED = "record_skipped"
    LOAD_FAILED = "load_failed"

    # Changes
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_DELETED = "transaction_deleted"
    DELETE_NOT_FOUND = "delete_not_found"
    CURRENCY_CHANGED = "currency_changed"

    # Persistence
    SAVE_FAILED = "save_failed"


class EventSeverity(str, Enum):
    """Severity level for ledger events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LedgerEvent(BaseModel):
    """
    A single ledger event.

    Every significant store action creates one of these.
    """

    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )

    event_type: LedgerEventType = Field(
        ...,
        description="Type of event"
    )
    severity: EventSeverity = Field(
        default=EventSeverity.INFO,
        description="Event severity"
    )

    # Which transaction, if any
    transaction_id: Optional[int] = Field(
        default=None,
        description="ID of the transaction this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "transaction_id": self.transaction_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class LedgerEventBuilder:
    """
    Helper class to build ledger events with common patterns.

    Usage:
        event = LedgerEventBuilder.transaction_added(tx_id, "125.50", "USD")
        event = LedgerEventBuilder.save_failed(path, error_message)
    """

    @staticmethod
    def ledger_loaded(
        path: str,
        record_count: int,
        skipped_count: int,
        next_id: int,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.LEDGER_LOADED,
            description=f"Loaded {record_count} transactions from {path}",
            details={
                "path": path,
                "record_count": record_count,
                "skipped_count": skipped_count,
                "next_id": next_id,
            },
        )

    @staticmethod
    def record_skipped(
        path: str,
        line_number: int,
        field_count: int,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.RECORD_SKIPPED,
            severity=EventSeverity.DEBUG,
            description=f"Skipped line {line_number}: {field_count} fields",
            details={
                "path": path,
                "line_number": line_number,
                "field_count": field_count,
            },
        )

    @staticmethod
    def load_failed(
        path: str,
        error_message: str,
        loaded_count: int,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.LOAD_FAILED,
            severity=EventSeverity.ERROR,
            description=f"Loading {path} stopped after {loaded_count} transactions",
            error_message=error_message,
            details={
                "path": path,
                "loaded_count": loaded_count,
            },
        )

    @staticmethod
    def transaction_added(
        transaction_id: int,
        amount: str,
        currency: str,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.TRANSACTION_ADDED,
            transaction_id=transaction_id,
            description=f"Transaction added: {amount} {currency}",
            details={
                "amount": amount,
                "currency": currency,
            },
        )

    @staticmethod
    def transaction_deleted(transaction_id: int) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.TRANSACTION_DELETED,
            transaction_id=transaction_id,
            description=f"Transaction {transaction_id} deleted",
        )

    @staticmethod
    def delete_not_found(transaction_id: int) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.DELETE_NOT_FOUND,
            severity=EventSeverity.INFO,
            transaction_id=transaction_id,
            description=f"No transaction with ID {transaction_id} to delete",
        )

    @staticmethod
    def currency_changed(old: str, new: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.CURRENCY_CHANGED,
            description=f"Currency changed from {old} to {new}",
            details={
                "old": old,
                "new": new,
            },
        )

    @staticmethod
    def save_failed(
        path: str,
        error_message: str,
        record_count: int,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.SAVE_FAILED,
            severity=EventSeverity.ERROR,
            description=f"Could not save {record_count} transactions to {path}",
            error_message=error_message,
            details={
                "path": path,
                "record_count": record_count,
            },
        )
