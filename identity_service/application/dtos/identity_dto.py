"""Identity DTO - the public view of an identity returned to callers."""

from pydantic import BaseModel

from identity_service.domain.entities.identity import Identity


class IdentityDTO(BaseModel):
    """
    DTO for returning identity data to the presentation layer.

    Salt and credential hash are deliberately absent: they never leave the
    service.
    """

    id: str
    handle: str
    email: str
    first_name: str
    last_name: str

    @classmethod
    def from_entity(cls, identity: Identity) -> "IdentityDTO":
        """Convert a domain entity to its public DTO."""
        return cls(
            id=identity.id,
            handle=identity.handle,
            email=identity.email,
            first_name=identity.first_name,
            last_name=identity.last_name,
        )
