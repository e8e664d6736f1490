"""
Error taxonomy shared by the domain, the use cases and the storage adapters.

- InvalidArgumentError: bad input (customer id, amount, status)
- NotFoundError: no credit application for the given id
- StorageError: any failure from either store, never retried or compensated
"""


class CreditFlowError(Exception):
    """Base exception for the credit application service."""

    error_code: str = "CREDITFLOW_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error_code": self.error_code, "message": self.message}


class InvalidArgumentError(CreditFlowError, ValueError):
    """Raised when input violates a domain invariant."""

    error_code: str = "INVALID_ARGUMENT"


class NotFoundError(CreditFlowError):
    """Raised when a credit application does not exist."""

    error_code: str = "NOT_FOUND"


class StorageError(CreditFlowError):
    """Raised by repository adapters when the underlying store fails."""

    error_code: str = "STORAGE_ERROR"
