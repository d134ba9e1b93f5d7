"""Response envelopes shared by every endpoint."""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Successful response envelope."""

    status: Literal["success"] = "success"
    message: str = Field(..., description="Human-readable summary")
    data: T | None = Field(None, description="Response payload")


class ValidationErrorDetail(BaseModel):
    """Detail for a single validation error."""

    field: str = Field(..., description="Field name that failed validation")
    message: str = Field(..., description="Human-readable error message")


class ErrorResponse(BaseModel):
    """Error response envelope."""

    status: Literal["error"] = "error"
    message: str = Field(..., description="Human-readable error message")
    error: str = Field(..., description="Machine-readable error code")
    details: Any | None = Field(None, description="Extra information about the error")
