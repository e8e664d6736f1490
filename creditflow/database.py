"""Database configuration and session management for the two independent stores.

Credit applications (current state) and audit events (append-only history)
live behind separate engines. Nothing here spans both, so a write to one
store is never rolled back because of a failure in the other.
"""
import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)


def normalize_database_url(url: str) -> str:
    # Render/Heroku hand out postgres:// but SQLAlchemy needs postgresql://
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def build_engine(url: str):
    """Create an engine configured for the database type behind ``url``."""
    url = normalize_database_url(url)
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
    )


# Relational store for current application state
SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./creditflow.db")
# Append-only store for audit events
AUDIT_DATABASE_URL = os.getenv("AUDIT_DATABASE_URL", "sqlite:///./creditflow_audit.db")

engine = build_engine(SQLALCHEMY_DATABASE_URL)
audit_engine = build_engine(AUDIT_DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
AuditSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=audit_engine)

Base = declarative_base()
AuditBase = declarative_base()


def init_db(bind=None) -> None:
    """Create the credit application tables."""
    # Registers CreditApplication on Base
    from creditflow.models import domain  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def init_audit_store(bind=None) -> None:
    """
    One-time setup of the audit store.

    Must run before the service accepts traffic; repositories assume the
    table exists and never check for it on the request path.
    """
    # Registers AuditEventRecord on AuditBase
    from creditflow.models import audit  # noqa: F401

    target = bind or audit_engine
    AuditBase.metadata.create_all(bind=target)
    logger.info("Audit store ready at %s", target.url.render_as_string(hide_password=True))


def get_db():
    """Dependency for FastAPI endpoints to get an application store session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_audit_db():
    """Dependency for FastAPI endpoints to get an audit store session."""
    db = AuditSessionLocal()
    try:
        yield db
    finally:
        db.close()
