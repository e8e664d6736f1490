"""
Persistence contracts consumed by the use cases.

The two repositories are independent: no operation spans both, and there is
no shared transaction between them. Implementations raise StorageError for
any failure of their underlying store.
"""
from typing import List, Optional, Protocol

from creditflow.models.audit import AuditEvent
from creditflow.models.domain import CreditApplication


class CreditApplicationRepository(Protocol):
    """Current state of credit applications (relational store)."""

    def create(self, application: CreditApplication) -> CreditApplication:
        ...

    def get_by_id(self, application_id: str) -> Optional[CreditApplication]:
        ...

    def update(self, application: CreditApplication) -> None:
        ...


class AuditEventRepository(Protocol):
    """Append-only audit events (separate store)."""

    def save_event(self, event: AuditEvent) -> None:
        ...

    def get_events_by_application_id(self, application_id: str) -> List[AuditEvent]:
        """Return every event for the application, oldest first."""
        ...
