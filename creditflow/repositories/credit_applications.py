"""SQLAlchemy repository for credit applications."""
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from creditflow.exceptions import StorageError
from creditflow.models.domain import CreditApplication

logger = logging.getLogger(__name__)


class SqlCreditApplicationRepository:
    """Stores credit applications in the relational store. Each write commits on its own."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, application: CreditApplication) -> CreditApplication:
        try:
            self.db.add(application)
            self.db.commit()
            self.db.refresh(application)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to create credit application %s", application.id)
            raise StorageError(f"Failed to create credit application: {exc}") from exc

        logger.debug("Created credit application %s", application.id)
        return application

    def get_by_id(self, application_id: str) -> Optional[CreditApplication]:
        try:
            return self.db.get(CreditApplication, str(application_id))
        except SQLAlchemyError as exc:
            logger.exception("Failed to load credit application %s", application_id)
            raise StorageError(f"Failed to load credit application: {exc}") from exc

    def update(self, application: CreditApplication) -> None:
        try:
            self.db.add(application)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to update credit application %s", application.id)
            raise StorageError(f"Failed to update credit application: {exc}") from exc

        logger.debug("Updated credit application %s", application.id)
