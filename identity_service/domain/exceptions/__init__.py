"""Domain exceptions - business rule violations and declared infrastructure faults."""

from identity_service.domain.exceptions.domain_exceptions import (
    DomainException,
    DuplicateIdentityException,
    EntropySourceUnavailableException,
    IdentityConsistencyException,
    InvalidEntityStateException,
    StorageUnavailableException,
)

__all__ = [
    "DomainException",
    "InvalidEntityStateException",
    "IdentityConsistencyException",
    "DuplicateIdentityException",
    "StorageUnavailableException",
    "EntropySourceUnavailableException",
]
