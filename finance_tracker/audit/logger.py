"""
Audit Logger

DESIGN DECISION: Every change to the transaction collection is logged,
and so is every persistence failure. This provides:
1. Traceability of user edits
2. A record of saved data that could not be read or written

The audit logger:
- Is synchronous, like the rest of the core
- Gracefully handles failures (doesn't crash the app if logging fails)
"""

import logging
import sys
from typing import Optional

import structlog

from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditSeverity,
)


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structlog on top of stdlib logging.

    Safe to call more than once; the last call wins.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )
    logging.getLogger("finance_tracker").setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
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
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Emits typed audit events to the structured log.
    """

    def __init__(self, logger_name: str = "finance_tracker.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was written.
        """
        try:
            log_dict = event.to_log_dict()
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
            return True
        except Exception as e:
            # Logging must never break a user action
            print(f"WARNING: Failed to write audit event: {e}", file=sys.stderr)
            return False

    def log_transaction_added(self, transaction_id: str, kind: str, amount: str) -> None:
        """Log a newly recorded transaction."""
        self.log(AuditEventBuilder.transaction_added(
            transaction_id=transaction_id,
            kind=kind,
            amount=amount,
        ))

    def log_transaction_updated(self, transaction_id: str, changed_fields: list[str]) -> None:
        """Log an edit."""
        self.log(AuditEventBuilder.transaction_updated(
            transaction_id=transaction_id,
            changed_fields=changed_fields,
        ))

    def log_transaction_deleted(self, transaction_id: str) -> None:
        self.log(AuditEventBuilder.transaction_deleted(transaction_id))

    def log_validation_failed(
        self,
        errors: dict[str, str],
        transaction_id: Optional[str] = None,
    ) -> None:
        self.log(AuditEventBuilder.validation_failed(
            errors=errors,
            transaction_id=transaction_id,
        ))

    def log_transactions_loaded(self, storage_key: str, count: int) -> None:
        self.log(AuditEventBuilder.transactions_loaded(storage_key, count))

    def log_load_failed(self, storage_key: str, error_message: str) -> None:
        """Log saved data that had to be discarded."""
        self.log(AuditEventBuilder.load_failed(storage_key, error_message))

    def log_save_failed(self, storage_key: str, error_message: str) -> None:
        """Log a write that did not reach storage."""
        self.log(AuditEventBuilder.save_failed(storage_key, error_message))
