"""Request and response DTOs for the use cases.

Only types are checked here; business rules live in the domain model so that
violations surface as InvalidArgumentError.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


# Create
class CreateCreditApplicationRequest(BaseModel):
    customer_id: Optional[str] = None
    credit_amount: Decimal
    application_date: datetime
    collateral_description: Optional[str] = None


class CreditApplicationDto(BaseModel):
    """Projection of a credit application with status rendered as text."""
    id: str
    customer_id: str
    credit_amount: Decimal
    application_date: datetime
    status: str
    collateral_description: Optional[str] = None

    @classmethod
    def from_entity(cls, application) -> "CreditApplicationDto":
        return cls(
            id=application.id,
            customer_id=application.customer_id,
            credit_amount=application.credit_amount,
            application_date=application.application_date,
            status=application.status.value,
            collateral_description=application.collateral_description,
        )


class CreateCreditApplicationResponse(CreditApplicationDto):
    pass


# Status update
class UpdateStatusRequest(BaseModel):
    new_status: str
    notes: Optional[str] = None


class UpdateStatusResponse(BaseModel):
    id: str
    previous_status: str
    new_status: str
    updated_at: datetime


# Read with history
class AuditEventResponse(BaseModel):
    application_id: str
    timestamp: str
    event_type: str
    new_state: str
    details: Dict[str, Any]


class GetApplicationResponse(BaseModel):
    application: CreditApplicationDto
    audit_history: List[AuditEventResponse]
