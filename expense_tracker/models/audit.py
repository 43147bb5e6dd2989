"""
Audit Models for Expense Tracker

Every ledger mutation and every storage problem is logged as an audit event.
This provides:
1. Traceability of what the user added and removed
2. Debugging information when storage misbehaves
3. A record of rejected input, useful when the form confuses people

DESIGN DECISION: Audit events are write-once. Nothing edits them after creation.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.
    """
    # User actions on the ledger
    EXPENSE_ADDED = "expense_added"
    EXPENSE_REMOVED = "expense_removed"
    EXPENSE_REJECTED = "expense_rejected"
    REMOVE_NOT_FOUND = "remove_not_found"
    
    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_SAVED = "ledger_saved"
    STORAGE_READ_FAILED = "storage_read_failed"
    STORAGE_WRITE_FAILED = "storage_write_failed"
    
    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.
    
    This is the core unit of our audit trail.
    """
    
    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )
    
    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )
    
    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'ledger')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )
    
    # Event details
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    
    # Error information (if applicable)
    error_message: Optional[str] = None
    
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )
    
    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.
    
    Usage:
        event = AuditEventBuilder.expense_added(expense.to_log_dict(), expense.month_key)
        event = AuditEventBuilder.storage_write_failed(slot_key, error_message)
    """
    
    @staticmethod
    def expense_added(record: dict, month: str) -> AuditEvent:
        """record is Expense.to_log_dict()."""
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=record["expense_id"],
            description=f"Expense added: {record['description']} - {record['amount']}",
            details={
                **record,
                "month": month,
            },
            is_user_action=True,
        )
    
    @staticmethod
    def expense_removed(expense_id: str, remaining: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REMOVED,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense removed",
            details={
                "remaining": remaining,
            },
            is_user_action=True,
        )
    
    @staticmethod
    def remove_not_found(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMOVE_NOT_FOUND,
            severity=AuditSeverity.DEBUG,
            entity_type="expense",
            entity_id=expense_id,
            description="Remove requested for an expense that is not in the ledger",
            is_user_action=True,
        )
    
    @staticmethod
    def expense_rejected(issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            description=f"Expense rejected with {len(issues)} issues",
            details={
                "issues": issues,
            },
            is_user_action=True,
        )
    
    @staticmethod
    def ledger_loaded(slot_key: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            entity_type="ledger",
            entity_id=slot_key,
            description=f"Ledger loaded with {count} expenses",
            details={
                "count": count,
            },
        )
    
    @staticmethod
    def ledger_saved(slot_key: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_SAVED,
            severity=AuditSeverity.DEBUG,
            entity_type="ledger",
            entity_id=slot_key,
            description=f"Ledger saved with {count} expenses",
            details={
                "count": count,
            },
        )
    
    @staticmethod
    def storage_read_failed(slot_key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_READ_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="ledger",
            entity_id=slot_key,
            description="Could not read stored ledger, starting empty",
            error_message=error_message,
        )
    
    @staticmethod
    def storage_write_failed(slot_key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_WRITE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            entity_id=slot_key,
            description="Could not save ledger, stored copy is stale",
            error_message=error_message,
        )
    
    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
