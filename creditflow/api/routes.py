"""API routes for the credit application lifecycle."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from creditflow.api.schemas import ErrorResponse
from creditflow.database import get_audit_db, get_db
from creditflow.exceptions import CreditFlowError, InvalidArgumentError, NotFoundError, StorageError
from creditflow.repositories.audit_events import SqlAuditEventRepository
from creditflow.repositories.credit_applications import SqlCreditApplicationRepository
from creditflow.services.dtos import (
    CreateCreditApplicationRequest,
    CreateCreditApplicationResponse,
    GetApplicationResponse,
    UpdateStatusRequest,
    UpdateStatusResponse,
)
from creditflow.services.use_cases import (
    CreateCreditApplicationUseCase,
    GetApplicationWithHistoryUseCase,
    UpdateApplicationStatusUseCase,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_application_repository(db: Session = Depends(get_db)) -> SqlCreditApplicationRepository:
    return SqlCreditApplicationRepository(db)


def get_audit_repository(db: Session = Depends(get_audit_db)) -> SqlAuditEventRepository:
    return SqlAuditEventRepository(db)


def _http_error(status_code: int, error: CreditFlowError) -> HTTPException:
    return HTTPException(status_code=status_code, detail=error.to_dict())


def _storage_failure(error: StorageError) -> HTTPException:
    # Driver details stay in the logs
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error_code": error.error_code,
            "message": "An error occurred while processing the request",
        },
    )


@router.post(
    "/credit-applications",
    response_model=CreateCreditApplicationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Invalid customer id or amount"}},
)
def create_credit_application(
    request: CreateCreditApplicationRequest,
    applications=Depends(get_application_repository),
    audit=Depends(get_audit_repository),
):
    """Create a credit application in Received status."""
    logger.info("Creating credit application for customer %s", request.customer_id)
    use_case = CreateCreditApplicationUseCase(applications, audit)
    try:
        return use_case.execute(request)
    except InvalidArgumentError as e:
        logger.warning("Rejected credit application: %s", e.message)
        raise _http_error(status.HTTP_400_BAD_REQUEST, e)
    except StorageError as e:
        logger.exception("Error creating credit application")
        raise _storage_failure(e)


@router.patch(
    "/credit-applications/{application_id}/status",
    response_model=UpdateStatusResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Unknown status"},
        404: {"model": ErrorResponse, "description": "Application not found"},
    },
)
def update_application_status(
    application_id: str,
    request: UpdateStatusRequest,
    applications=Depends(get_application_repository),
    audit=Depends(get_audit_repository),
):
    """
    Move a credit application to another status.
    Any status may follow any other; the change is appended to the audit trail.
    """
    logger.info("Updating status for application %s to %s", application_id, request.new_status)
    use_case = UpdateApplicationStatusUseCase(applications, audit)
    try:
        return use_case.execute(application_id, request)
    except NotFoundError as e:
        logger.warning("Application not found: %s", application_id)
        raise _http_error(status.HTTP_404_NOT_FOUND, e)
    except InvalidArgumentError as e:
        logger.warning("Rejected status update for %s: %s", application_id, e.message)
        raise _http_error(status.HTTP_400_BAD_REQUEST, e)
    except StorageError as e:
        logger.exception("Error updating status for application %s", application_id)
        raise _storage_failure(e)


@router.get(
    "/credit-applications/{application_id}",
    response_model=GetApplicationResponse,
    responses={404: {"model": ErrorResponse, "description": "Application not found"}},
)
def get_credit_application(
    application_id: str,
    applications=Depends(get_application_repository),
    audit=Depends(get_audit_repository),
):
    """Get a credit application with its full audit history, oldest first."""
    use_case = GetApplicationWithHistoryUseCase(applications, audit)
    try:
        return use_case.execute(application_id)
    except NotFoundError as e:
        logger.warning("Application not found: %s", application_id)
        raise _http_error(status.HTTP_404_NOT_FOUND, e)
    except StorageError as e:
        logger.exception("Error getting application %s", application_id)
        raise _storage_failure(e)
