"""
Audit trail for credit applications.

AuditEvent is the immutable value built by the use cases and returned to
callers. AuditEventRecord is its row in the append-only audit store, which
is a different database from the one holding credit applications.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from sqlalchemy import JSON, Column, Integer, String

from creditflow.database import AuditBase
from creditflow.models.enums import AuditEventType, CreditApplicationStatus


def _timestamp() -> str:
    # Fixed width keeps lexicographic order equal to chronological order
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


@dataclass(frozen=True)
class AuditEvent:
    """
    One state change of one credit application.

    Invariants:
    - Once built, never edited
    - Saved once, never updated or deleted
    - Linked to its application only by the id value
    """
    application_id: str
    timestamp: str  # ISO-8601, UTC
    event_type: str
    new_state: str
    details: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Read-only copy: callers cannot edit recorded history through the event
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    @classmethod
    def creation(cls, application_id, customer_id: str, credit_amount: Decimal) -> "AuditEvent":
        """Event recorded when an application is created."""
        return cls(
            application_id=str(application_id),
            timestamp=_timestamp(),
            event_type=AuditEventType.CREATION.value,
            new_state=CreditApplicationStatus.RECEIVED.value,
            details={
                # Kept as text so the JSON column preserves the exact decimal
                "creditAmount": str(credit_amount),
                "customerId": customer_id,
            },
        )

    @classmethod
    def status_update(
        cls,
        application_id,
        previous_status: str,
        new_status: str,
        notes: Optional[str] = None,
    ) -> "AuditEvent":
        """Event recorded when an application's status changes."""
        details: Dict[str, Any] = {"previousStatus": previous_status}
        if notes and notes.strip():
            details["notes"] = notes

        return cls(
            application_id=str(application_id),
            timestamp=_timestamp(),
            event_type=AuditEventType.STATUS_UPDATE.value,
            new_state=new_status,
            details=details,
        )


class AuditEventRecord(AuditBase):
    """Append-only row for an AuditEvent. Never edited or deleted."""
    __tablename__ = "audit_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(String(36), nullable=False, index=True)
    timestamp = Column(String, nullable=False, index=True)
    event_type = Column(String, nullable=False)
    new_state = Column(String, nullable=False)
    details = Column(JSON, nullable=False, default=dict)

    @classmethod
    def from_event(cls, event: AuditEvent) -> "AuditEventRecord":
        return cls(
            application_id=event.application_id,
            timestamp=event.timestamp,
            event_type=event.event_type,
            new_state=event.new_state,
            details=dict(event.details),
        )

    def to_event(self) -> AuditEvent:
        return AuditEvent(
            application_id=self.application_id,
            timestamp=self.timestamp,
            event_type=self.event_type,
            new_state=self.new_state,
            details=dict(self.details or {}),
        )
