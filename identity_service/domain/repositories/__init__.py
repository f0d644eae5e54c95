"""Repository interfaces - define contracts for data access."""

from identity_service.domain.repositories.credential_store import (
    ICredentialStore,
    IdentityFilter,
)

__all__ = ["ICredentialStore", "IdentityFilter"]
