"""Domain layer exceptions for business rule violations and infrastructure faults."""


class DomainException(Exception):
    """
    Base exception for domain layer.

    Domain exceptions represent business rule violations and should be
    raised when domain invariants are broken. Infrastructure faults that
    the domain interfaces declare (storage, entropy) derive from it too,
    so a single handler can translate them by error_code.
    """

    def __init__(self, message: str, error_code: str = "DOMAIN_ERROR"):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
        """
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class InvalidEntityStateException(DomainException):
    """Raised when an entity is in an invalid state."""

    def __init__(self, message: str):
        super().__init__(message, error_code="INVALID_ENTITY_STATE")


class IdentityConsistencyException(DomainException):
    """Raised when the store holds more than one identity for a handle or email."""

    def __init__(self, message: str):
        super().__init__(message, error_code="IDENTITY_CONSISTENCY_ERROR")


class DuplicateIdentityException(DomainException):
    """Raised by a credential store when a write would violate handle/email uniqueness."""

    def __init__(self, message: str = "Identity already exists"):
        super().__init__(message, error_code="IDENTITY_CONFLICT")


class StorageUnavailableException(DomainException):
    """Raised when the underlying credential store call fails."""

    def __init__(self, message: str = "Credential store is unavailable"):
        super().__init__(message, error_code="STORAGE_UNAVAILABLE")


class EntropySourceUnavailableException(DomainException):
    """Raised when the secure random source cannot produce a salt."""

    def __init__(self, message: str = "Secure random source is unavailable"):
        super().__init__(message, error_code="ENTROPY_SOURCE_UNAVAILABLE")
