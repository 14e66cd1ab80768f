from pydantic import BaseModel, Field
from typing import Generic, TypeVar, Optional, Any, Dict

DataType = TypeVar("DataType")

class APIResponse(BaseModel, Generic[DataType]):
    """Envelope for every successful response."""
    message: str = Field(..., description="A human-readable message about the response.")
    data: Optional[DataType] = Field(None, description="Payload, if any.")

class ErrorDetail(BaseModel):
    code: str = Field(..., description="Error code for client handling, e.g. FORBIDDEN")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error context")

class ErrorResponse(BaseModel):
    """Envelope for every error response, whatever raised it."""
    error: ErrorDetail
    timestamp: str = Field(..., description="ISO 8601 timestamp of error")
    path: str = Field(..., description="Request path that caused the error")
    request_id: Optional[str] = Field(None, description="Matches the X-Request-ID header")
