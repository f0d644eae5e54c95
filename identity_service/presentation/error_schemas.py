"""Pydantic models for error responses used in OpenAPI schema generation."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for every raised application or domain error."""

    detail: str = Field(..., examples=["Credential store is unavailable"])
    error_code: str = Field(..., examples=["STORAGE_UNAVAILABLE"])


class ValidationErrorDetail(BaseModel):
    """A single field validation error."""

    field: str = Field(
        ...,
        description="The field path where the validation error occurred",
        examples=["body.email", "body.handle"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message describing what went wrong",
        examples=["value is not a valid email address"],
    )


class ValidationErrorResponse(BaseModel):
    """Body of a 422 response, as built by validation_error_handler."""

    detail: str = Field(..., examples=["Validation failed"])
    error_code: str = Field(..., examples=["VALIDATION_ERROR"])
    errors: list[ValidationErrorDetail] = Field(..., min_length=1)
