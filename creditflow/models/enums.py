"""Enums for the credit application lifecycle - the only valid status and event values."""
from enum import Enum


class CreditApplicationStatus(str, Enum):
    """
    The four statuses a CreditApplication can be in. No other statuses are allowed.

    There is no transition graph: any status may follow any other.
    """
    RECEIVED = "Received"
    IN_ANALYSIS = "InAnalysis"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    @classmethod
    def values(cls) -> list:
        return [status.value for status in cls]


class AuditEventType(str, Enum):
    """Kinds of state change recorded in the audit trail."""
    CREATION = "Creation"
    STATUS_UPDATE = "StatusUpdate"
