"""Repository implementations using SQLAlchemy."""

from identity_service.infrastructure.repositories.credential_store_impl import (
    SqlAlchemyCredentialStore,
)

__all__ = ["SqlAlchemyCredentialStore"]
