"""SQLAlchemy repository for the append-only audit store."""
import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from creditflow.exceptions import StorageError
from creditflow.models.audit import AuditEvent, AuditEventRecord

logger = logging.getLogger(__name__)


class SqlAuditEventRepository:
    """
    Appends audit events and reads them back per application.

    Expects init_audit_store() to have created the table at startup.
    Only inserts and selects are issued; rows are never updated or deleted.
    """

    def __init__(self, db: Session):
        self.db = db

    def save_event(self, event: AuditEvent) -> None:
        try:
            self.db.add(AuditEventRecord.from_event(event))
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception(
                "Failed to save %s audit event for application %s",
                event.event_type,
                event.application_id,
            )
            raise StorageError(f"Failed to save audit event: {exc}") from exc

        logger.debug("Saved %s audit event for application %s", event.event_type, event.application_id)

    def get_events_by_application_id(self, application_id: str) -> List[AuditEvent]:
        try:
            records = (
                self.db.query(AuditEventRecord)
                .filter(AuditEventRecord.application_id == str(application_id))
                .order_by(AuditEventRecord.timestamp.asc(), AuditEventRecord.id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            logger.exception("Failed to read audit events for application %s", application_id)
            raise StorageError(f"Failed to read audit events: {exc}") from exc

        logger.debug("Loaded %d audit events for application %s", len(records), application_id)
        return [record.to_event() for record in records]
