"""Application layer exceptions.

Expected outcomes of the credential flows (conflicts, unknown email, wrong
password) are returned as typed results, not raised. These exceptions cover
malformed input and the token-guarded endpoints.
"""


class ApplicationError(Exception):
    """Base application layer exception."""

    def __init__(self, message: str, error_code: str = "APPLICATION_ERROR"):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
        """
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class IdentifierValidationError(ApplicationError):
    """Raised when a handle or email is malformed after normalization."""

    def __init__(self, message: str = "Invalid handle or email"):
        super().__init__(message, error_code="VALIDATION_ERROR")


class UserNotFoundError(ApplicationError):
    """Raised when a token refers to an identity that no longer exists."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, error_code="USER_NOT_FOUND")


class InvalidTokenError(ApplicationError):
    """Raised when a token is invalid or malformed."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, error_code="INVALID_TOKEN")


class UnauthorizedError(ApplicationError):
    """Raised when the authenticated caller may not act on the requested identity."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, error_code="UNAUTHORIZED")
