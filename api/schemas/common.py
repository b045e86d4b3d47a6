"""Common Pydantic schemas shared across the API."""

from typing import Optional
from pydantic import BaseModel, Field


class FieldError(BaseModel):
    """A single field-level validation failure."""

    field: str = Field(description="Dotted path of the offending field")
    message: str = Field(description="Human readable reason")
    type: str = Field(description="Validation error type")


class ErrorResponse(BaseModel):
    """Error response model."""

    message: str = Field(description="Error message")
    errors: Optional[list[FieldError]] = Field(
        None, description="Field-level validation errors, when applicable"
    )
