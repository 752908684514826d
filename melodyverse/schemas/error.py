"""Standardized error response schema."""

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error body for domain exceptions."""

    success: bool = False
    message: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Machine-readable error code")
    errors: list[FieldError] | None = Field(
        default=None, description="Per-field validation failures"
    )
