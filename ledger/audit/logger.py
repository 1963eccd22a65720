"""
Audit Logger

DESIGN DECISION: Every change to the ledger is logged.
This provides:
1. Traceability of adds, deletes and currency changes
2. Visibility of storage failures and skipped lines
3. Debugging capability without touching the console output

The audit logger:
- Writes structured JSON lines through structlog on top of stdlib logging
- Never raises; a logging failure must not break a ledger operation
"""

import logging
import sys
from typing import Optional

import structlog

from ledger.models.audit import EventSeverity, LedgerEvent


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "WARNING") -> None:
    """
    Route structlog output to stderr at the given stdlib level.

    The console menu owns stdout, so log lines go to stderr and
    stay quiet below WARNING unless asked for.
    """
    numeric = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=numeric)
    # basicConfig is a no-op once handlers exist
    logging.getLogger().setLevel(numeric)


class AuditLogger:
    """
    Central audit logging service.

    Logs ledger events to the structured local log.
    """

    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None):
        """
        Initialize audit logger.

        Args:
            logger: structlog logger to write to.
                    If None, the ``ledger.audit`` logger is used.
        """
        self._logger = logger or structlog.get_logger("ledger.audit")

    def log(self, event: LedgerEvent) -> bool:
        """
        Log a ledger event at the level matching its severity.

        Returns True if the event was handed to the logger.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity == EventSeverity.ERROR:
                self._logger.error("ledger_event", **log_dict)
            elif event.severity == EventSeverity.WARNING:
                self._logger.warning("ledger_event", **log_dict)
            elif event.severity == EventSeverity.DEBUG:
                self._logger.debug("ledger_event", **log_dict)
            else:
                self._logger.info("ledger_event", **log_dict)
        except Exception as e:
            # Log failure but don't raise
            logging.getLogger(__name__).error(
                "Failed to write ledger event %s: %s", event.event_type.value, e
            )
            return False

        return True
