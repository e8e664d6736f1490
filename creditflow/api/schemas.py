"""Pydantic schemas specific to the HTTP layer."""
from pydantic import BaseModel


# Error response
class ErrorResponse(BaseModel):
    error_code: str
    message: str
