"""
In-memory repositories for tests and local development.

NOT FOR PRODUCTION USE - data is lost on restart.
"""
from typing import Dict, List, Optional

from creditflow.models.audit import AuditEvent
from creditflow.models.domain import CreditApplication


class InMemoryCreditApplicationRepository:
    def __init__(self) -> None:
        self._applications: Dict[str, CreditApplication] = {}

    def create(self, application: CreditApplication) -> CreditApplication:
        self._applications[str(application.id)] = application
        return application

    def get_by_id(self, application_id: str) -> Optional[CreditApplication]:
        return self._applications.get(str(application_id))

    def update(self, application: CreditApplication) -> None:
        self._applications[str(application.id)] = application

    def clear(self) -> None:
        """Clear all data (for testing)."""
        self._applications.clear()


class InMemoryAuditEventRepository:
    def __init__(self) -> None:
        self._events: List[AuditEvent] = []

    def save_event(self, event: AuditEvent) -> None:
        self._events.append(event)

    def get_events_by_application_id(self, application_id: str) -> List[AuditEvent]:
        events = [e for e in self._events if e.application_id == str(application_id)]
        # Stable sort keeps insertion order for equal timestamps
        return sorted(events, key=lambda e: e.timestamp)

    def clear(self) -> None:
        """Clear all data (for testing)."""
        self._events.clear()
