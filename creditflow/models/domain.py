"""Domain model - the credit application and its invariants."""
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional
from uuid import uuid4

from sqlalchemy import Column, DateTime, Enum as SQLEnum, String
from sqlalchemy.types import TypeDecorator

from creditflow.database import Base
from creditflow.exceptions import InvalidArgumentError
from creditflow.models.enums import CreditApplicationStatus

# Open interval: both bounds are rejected
MIN_CREDIT_AMOUNT = Decimal("1000")
MAX_CREDIT_AMOUNT = Decimal("150000")


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _clean_customer_id(customer_id: Optional[str]) -> str:
    if customer_id is None or not str(customer_id).strip():
        raise InvalidArgumentError("Customer ID cannot be empty")
    return str(customer_id)


def _clean_credit_amount(credit_amount) -> Decimal:
    """Coerce to Decimal and enforce 1000 < amount < 150000 on the exact value."""
    if isinstance(credit_amount, bool):
        raise InvalidArgumentError("Credit amount must be a number")
    try:
        amount = Decimal(str(credit_amount))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidArgumentError("Credit amount must be a number")
    if not amount.is_finite():
        raise InvalidArgumentError("Credit amount must be a number")

    if amount <= MIN_CREDIT_AMOUNT or amount >= MAX_CREDIT_AMOUNT:
        raise InvalidArgumentError(
            "Credit amount must be greater than 1,000 and less than 150,000"
        )
    return amount


class ExactDecimal(TypeDecorator):
    """Decimal stored as text, so the amount reads back exactly as it was validated."""
    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return None if value is None else str(value)

    def process_result_value(self, value, dialect):
        return None if value is None else Decimal(value)


class CreditApplication(Base):
    """
    A credit application moves between Received, InAnalysis, Approved and Rejected.

    Invariants enforced here:
    - customer_id is never blank
    - credit_amount is always strictly between 1,000 and 150,000
    - status is always one of the four allowed statuses
    - created with status Received; changed only through update_status()

    Any status may follow any other. Rows loaded from the database bypass
    __init__, so validation applies to new applications and to transitions.
    """
    __tablename__ = "credit_applications"

    id = Column(String(36), primary_key=True, index=True)
    customer_id = Column(String, nullable=False, index=True)
    credit_amount = Column(ExactDecimal, nullable=False)
    application_date = Column(DateTime, nullable=False)
    status = Column(SQLEnum(CreditApplicationStatus), nullable=False, default=CreditApplicationStatus.RECEIVED)
    collateral_description = Column(String, nullable=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    def __init__(
        self,
        customer_id: str,
        credit_amount,
        application_date: datetime,
        collateral_description: Optional[str] = None,
    ):
        customer_id = _clean_customer_id(customer_id)
        credit_amount = _clean_credit_amount(credit_amount)
        now = utcnow()
        super().__init__(
            id=str(uuid4()),
            customer_id=customer_id,
            credit_amount=credit_amount,
            application_date=application_date,
            status=CreditApplicationStatus.RECEIVED,
            collateral_description=collateral_description,
            created_at=now,
            updated_at=now,
        )

    def update_status(self, new_status) -> None:
        """
        Move to ``new_status`` and refresh updated_at.

        No adjacency check: staying put or leaving Approved/Rejected is allowed.
        """
        try:
            status = CreditApplicationStatus(new_status)
        except ValueError:
            raise InvalidArgumentError(f"Invalid status: {new_status}")

        now = utcnow()
        # Clock resolution can repeat a value; updated_at must still move forward
        if self.updated_at is not None and now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)

        self.status = status
        self.updated_at = now

    def __repr__(self) -> str:
        return f"<CreditApplication {self.id} {self.status.value if self.status else None}>"
