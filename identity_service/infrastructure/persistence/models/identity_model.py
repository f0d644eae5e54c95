"""Identity ORM model - infrastructure layer SQLAlchemy mapping."""

from sqlalchemy import LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from identity_service.domain.entities.identity import Identity
from identity_service.domain.services.credential_hasher import SALT_SIZE_BYTES
from identity_service.infrastructure.persistence.database import Base


class IdentityModel(Base):
    """
    SQLAlchemy ORM model for the identities table.

    One row per identity, keyed by the normalized handle. The unique index
    on email and the id column let the database reject duplicates that a
    racing registration slipped past the application-level conflict check.
    """

    __tablename__ = "identities"

    # Store key
    handle: Mapped[str] = mapped_column(String(64), primary_key=True)

    id: Mapped[str] = mapped_column(String(36), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(
        String(254),
        unique=True,
        index=True,
        nullable=False,
    )

    # Profile
    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    # Credential
    salt: Mapped[bytes] = mapped_column(LargeBinary(SALT_SIZE_BYTES), nullable=False)
    credential_hash: Mapped[str] = mapped_column(String(64), nullable=False)

    def __repr__(self) -> str:
        """String representation of IdentityModel (credentials omitted)."""
        return f"IdentityModel(id={self.id!r}, handle={self.handle!r}, email={self.email!r})"

    def to_entity(self) -> Identity:
        """
        Convert ORM model to domain entity.

        Every column is mapped explicitly; adding a column means adding it here.

        Returns:
            Identity domain entity
        """
        return Identity(
            id=self.id,
            handle=self.handle,
            email=self.email,
            salt=bytes(self.salt),
            credential_hash=self.credential_hash,
            first_name=self.first_name,
            last_name=self.last_name,
        )

    @staticmethod
    def from_entity(identity: Identity) -> "IdentityModel":
        """
        Create ORM model from domain entity.

        Args:
            identity: Domain entity

        Returns:
            ORM model ready for persistence
        """
        return IdentityModel(
            handle=identity.handle,
            id=identity.id,
            email=identity.email,
            first_name=identity.first_name,
            last_name=identity.last_name,
            salt=identity.salt,
            credential_hash=identity.credential_hash,
        )

    def apply(self, identity: Identity) -> None:
        """Copy the mutable fields of an entity onto this row (key and id are fixed)."""
        self.email = identity.email
        self.first_name = identity.first_name
        self.last_name = identity.last_name
        self.salt = identity.salt
        self.credential_hash = identity.credential_hash
