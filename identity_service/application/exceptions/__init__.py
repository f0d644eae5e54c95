"""Application layer exceptions."""

from identity_service.application.exceptions.exceptions import (
    ApplicationError,
    IdentifierValidationError,
    InvalidTokenError,
    UnauthorizedError,
    UserNotFoundError,
)

__all__ = [
    "ApplicationError",
    "IdentifierValidationError",
    "InvalidTokenError",
    "UnauthorizedError",
    "UserNotFoundError",
]
