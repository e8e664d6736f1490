"""
Use cases for the credit application lifecycle.

Each use case writes to the application store first and to the audit store
second. The two writes are not atomic: if the audit write fails, the
application change stays committed with no audit record and nothing is
rolled back or retried. StorageError propagates to the caller unchanged.
"""
import logging

from creditflow.services.dtos import (
    AuditEventResponse,
    CreateCreditApplicationRequest,
    CreateCreditApplicationResponse,
    CreditApplicationDto,
    GetApplicationResponse,
    UpdateStatusRequest,
    UpdateStatusResponse,
)
from creditflow.exceptions import InvalidArgumentError, NotFoundError
from creditflow.models.audit import AuditEvent
from creditflow.models.domain import CreditApplication
from creditflow.models.enums import CreditApplicationStatus
from creditflow.repositories.base import AuditEventRepository, CreditApplicationRepository

logger = logging.getLogger(__name__)


class CreateCreditApplicationUseCase:
    """Validate, store a new application, then record its creation event."""

    def __init__(
        self,
        applications: CreditApplicationRepository,
        audit: AuditEventRepository,
    ):
        self.applications = applications
        self.audit = audit

    def execute(self, request: CreateCreditApplicationRequest) -> CreateCreditApplicationResponse:
        # Validation happens in the constructor
        application = CreditApplication(
            customer_id=request.customer_id,
            credit_amount=request.credit_amount,
            application_date=request.application_date,
            collateral_description=request.collateral_description,
        )

        self.applications.create(application)

        event = AuditEvent.creation(
            application.id,
            application.customer_id,
            application.credit_amount,
        )
        self.audit.save_event(event)

        logger.info("Credit application %s created for customer %s", application.id, application.customer_id)
        return CreateCreditApplicationResponse.from_entity(application)


class UpdateApplicationStatusUseCase:
    """
    Move an application to a new status and record the change.

    Both failure paths (unknown id, unparseable status) raise before any
    store write.
    """

    def __init__(
        self,
        applications: CreditApplicationRepository,
        audit: AuditEventRepository,
    ):
        self.applications = applications
        self.audit = audit

    def execute(self, application_id: str, request: UpdateStatusRequest) -> UpdateStatusResponse:
        application = self.applications.get_by_id(application_id)
        if application is None:
            raise NotFoundError(f"Application with ID {application_id} not found")

        try:
            new_status = CreditApplicationStatus(request.new_status)
        except ValueError:
            raise InvalidArgumentError(
                f"Invalid status: {request.new_status}. "
                f"Valid values are: {', '.join(CreditApplicationStatus.values())}"
            )

        previous_status = application.status.value

        application.update_status(new_status)
        self.applications.update(application)

        event = AuditEvent.status_update(
            application.id,
            previous_status,
            new_status.value,
            request.notes,
        )
        self.audit.save_event(event)

        logger.info(
            "Credit application %s moved from %s to %s",
            application.id,
            previous_status,
            new_status.value,
        )
        return UpdateStatusResponse(
            id=application.id,
            previous_status=previous_status,
            new_status=new_status.value,
            updated_at=application.updated_at,
        )


class GetApplicationWithHistoryUseCase:
    """Read an application and its full audit trail, oldest event first."""

    def __init__(
        self,
        applications: CreditApplicationRepository,
        audit: AuditEventRepository,
    ):
        self.applications = applications
        self.audit = audit

    def execute(self, application_id: str) -> GetApplicationResponse:
        application = self.applications.get_by_id(application_id)
        if application is None:
            raise NotFoundError(f"Application with ID {application_id} not found")

        history = self.audit.get_events_by_application_id(application.id)

        return GetApplicationResponse(
            application=CreditApplicationDto.from_entity(application),
            audit_history=[
                AuditEventResponse(
                    application_id=event.application_id,
                    timestamp=event.timestamp,
                    event_type=event.event_type,
                    new_state=event.new_state,
                    details=dict(event.details),
                )
                for event in history
            ],
        )
