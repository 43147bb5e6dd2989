"""
Audit Logger

DESIGN DECISION: Every ledger mutation and storage problem is logged.
This provides:
1. Traceability of what changed in the ledger
2. Debugging capability when the stored file goes bad
3. Visibility into rejected input

The audit logger:
- Is synchronous, like the ledger it reports on
- Never raises (a logging problem must not break add/remove)
"""

import logging
from typing import Optional

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from expense_tracker.models.expense import Expense, ValidationResult


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


def configure_logging(level: str = "INFO") -> None:
    """
    Route structlog's JSON lines to stderr at the given level.
    
    structlog renders the full line, so the stdlib format is just the message.
    """
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )


class AuditLogger:
    """
    Central audit logging service.
    
    Logs events to the structured local log. Severity decides the level.
    """
    
    def __init__(self, logger_name: str = "expense_tracker.audit"):
        self._logger = structlog.get_logger(logger_name)
    
    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.
        
        Returns False if the log call itself failed.
        """
        log_dict = event.to_log_dict()
        
        try:
            if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            # Logging failures never propagate
            return False
        
        return True
    
    def log_expense_added(self, expense: Expense) -> None:
        """Log a successful add."""
        event = AuditEventBuilder.expense_added(
            record=expense.to_log_dict(),
            month=expense.month_key,
        )
        self.log(event)
    
    def log_expense_removed(self, expense_id: str, remaining: int) -> None:
        """Log a successful remove."""
        self.log(AuditEventBuilder.expense_removed(expense_id, remaining))
    
    def log_remove_not_found(self, expense_id: str) -> None:
        """Log a remove that matched nothing."""
        self.log(AuditEventBuilder.remove_not_found(expense_id))
    
    def log_expense_rejected(self, result: ValidationResult) -> None:
        """Log input that failed validation."""
        event = AuditEventBuilder.expense_rejected(
            issues=[issue.model_dump() for issue in result.issues],
        )
        self.log(event)
    
    def log_ledger_loaded(self, slot_key: str, count: int) -> None:
        self.log(AuditEventBuilder.ledger_loaded(slot_key, count))
    
    def log_ledger_saved(self, slot_key: str, count: int) -> None:
        self.log(AuditEventBuilder.ledger_saved(slot_key, count))
    
    def log_storage_read_failed(self, slot_key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.storage_read_failed(slot_key, error_message))
    
    def log_storage_write_failed(self, slot_key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.storage_write_failed(slot_key, error_message))
    
    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        )
        self.log(event)
