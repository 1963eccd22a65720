"""Tests for the audit logger."""

import logging
from unittest.mock import MagicMock

from ledger.audit import AuditLogger, configure_logging
from ledger.models.audit import EventSeverity, LedgerEvent, LedgerEventBuilder, LedgerEventType


def test_routes_by_severity():
    logger = MagicMock()
    audit = AuditLogger(logger=logger)

    audit.log(LedgerEventBuilder.transaction_deleted(1))
    audit.log(LedgerEventBuilder.save_failed("ledger.txt", "denied", 0))
    audit.log(LedgerEventBuilder.record_skipped("ledger.txt", 3, 2))
    audit.log(LedgerEvent(
        event_type=LedgerEventType.CURRENCY_CHANGED,
        severity=EventSeverity.WARNING,
        description="Currency changed",
    ))

    assert logger.info.call_args.kwargs["event_type"] == "transaction_deleted"
    assert logger.error.call_args.kwargs["error_message"] == "denied"
    assert logger.debug.call_args.kwargs["details"]["line_number"] == 3
    assert logger.warning.call_args.kwargs["event_type"] == "currency_changed"


def test_logging_failure_does_not_raise():
    logger = MagicMock()
    logger.info.side_effect = RuntimeError("handler broke")
    audit = AuditLogger(logger=logger)

    assert audit.log(LedgerEventBuilder.transaction_deleted(1)) is False


def test_default_logger_accepts_events():
    configure_logging("INFO")
    try:
        assert AuditLogger().log(LedgerEventBuilder.currency_changed("UAH", "USD")) is True
    finally:
        logging.getLogger().setLevel(logging.WARNING)


def test_configure_logging_sets_level():
    configure_logging("debug")
    try:
        assert logging.getLogger().level == logging.DEBUG
    finally:
        logging.getLogger().setLevel(logging.WARNING)


def test_missing_delete_target_stays_below_default_level():
    """Deleting an unknown ID is logged at info, so the default WARNING level hides it."""
    logger = MagicMock()
    AuditLogger(logger=logger).log(LedgerEventBuilder.delete_not_found(2))

    assert logger.info.call_args.kwargs["event_type"] == "delete_not_found"
    logger.warning.assert_not_called()
