"""Pytest configuration and shared fixtures."""
from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from creditflow.database import init_audit_store, init_db
from creditflow.exceptions import StorageError
from creditflow.models.domain import CreditApplication
from creditflow.repositories.audit_events import SqlAuditEventRepository
from creditflow.repositories.credit_applications import SqlCreditApplicationRepository
from creditflow.repositories.in_memory import (
    InMemoryAuditEventRepository,
    InMemoryCreditApplicationRepository,
)


def _memory_engine():
    # One shared connection so every session (and TestClient thread) sees the same database
    return create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def app_engine():
    """Fresh in-memory application store for each test."""
    engine = _memory_engine()
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def audit_engine():
    """Fresh in-memory audit store for each test, separate from the application store."""
    engine = _memory_engine()
    init_audit_store(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(app_engine):
    session = sessionmaker(bind=app_engine)()
    yield session
    session.close()


@pytest.fixture
def audit_session(audit_engine):
    session = sessionmaker(bind=audit_engine)()
    yield session
    session.close()


@pytest.fixture
def sql_applications(db_session):
    return SqlCreditApplicationRepository(db_session)


@pytest.fixture
def sql_audit(audit_session):
    return SqlAuditEventRepository(audit_session)


class RecordingCreditApplicationRepository(InMemoryCreditApplicationRepository):
    """In-memory repository that counts writes and can be told to fail them."""

    def __init__(self, fail_writes: bool = False):
        super().__init__()
        self.fail_writes = fail_writes
        self.creates = 0
        self.updates = 0

    def create(self, application):
        if self.fail_writes:
            raise StorageError("application store unavailable")
        self.creates += 1
        return super().create(application)

    def update(self, application):
        if self.fail_writes:
            raise StorageError("application store unavailable")
        self.updates += 1
        super().update(application)

    @property
    def writes(self) -> int:
        return self.creates + self.updates


class RecordingAuditEventRepository(InMemoryAuditEventRepository):
    """In-memory audit repository that counts writes and can be told to fail them."""

    def __init__(self, fail_writes: bool = False):
        super().__init__()
        self.fail_writes = fail_writes
        self.saved = []

    def save_event(self, event):
        if self.fail_writes:
            raise StorageError("audit store unavailable")
        self.saved.append(event)
        super().save_event(event)

    @property
    def writes(self) -> int:
        return len(self.saved)


@pytest.fixture
def applications():
    return RecordingCreditApplicationRepository()


@pytest.fixture
def audit():
    return RecordingAuditEventRepository()


@pytest.fixture
def sample_application(applications):
    """A stored application in Received status, seeded without going through a use case."""
    application = CreditApplication(
        customer_id="CUST-001",
        credit_amount=Decimal("50000"),
        application_date=datetime(2026, 10, 1),
        collateral_description="Apartment in downtown",
    )
    applications.create(application)
    applications.creates = 0
    return application
