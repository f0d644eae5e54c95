"""Credential store interface - the narrow contract the core needs from storage."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from identity_service.domain.entities.identity import Identity


@dataclass(frozen=True)
class IdentityFilter:
    """
    Predicate for ICredentialStore.fetch_where.

    Matches identities whose email equals `email` OR whose handle equals
    `handle`. Values are compared as given; callers pass normalized values.
    """

    email: str | None = None
    handle: str | None = None

    def __post_init__(self):
        if self.email is None and self.handle is None:
            raise ValueError("IdentityFilter needs an email, a handle, or both")

    def matches(self, identity: Identity) -> bool:
        """Evaluate the predicate against a single identity."""
        return (self.email is not None and identity.email == self.email) or (
            self.handle is not None and identity.handle == self.handle
        )


class ICredentialStore(ABC):
    """
    Keyed identity store.

    The store is opaque, possibly remote and possibly failing. The core
    assumes nothing beyond per-call atomicity of a single upsert; true
    uniqueness of handle and email is the store's job.

    All methods raise StorageUnavailableException when the backend call fails.
    """

    @abstractmethod
    async def fetch_by_key(self, key: str) -> Identity | None:
        """
        Fetch the identity stored under a key (the normalized handle).

        Args:
            key: The normalized handle

        Returns:
            Identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def fetch_where(self, criteria: IdentityFilter) -> list[Identity]:
        """
        Fetch every identity matching a predicate.

        Args:
            criteria: Email/handle predicate

        Returns:
            Matching identities, possibly empty, in no particular order
        """
        pass

    @abstractmethod
    async def upsert(self, key: str, identity: Identity) -> Identity:
        """
        Insert or replace the identity stored under a key.

        Args:
            key: The identity's normalized handle
            identity: The full record to store

        Returns:
            The stored identity

        Raises:
            DuplicateIdentityException: If the key belongs to a different
                identity id, or the email is already held by another identity
            StorageUnavailableException: If the backend call fails
        """
        pass
