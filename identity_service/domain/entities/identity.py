"""Identity domain entity - pure business logic, no infrastructure."""

from dataclasses import dataclass, replace
from typing import Optional

from identity_service.domain.exceptions import InvalidEntityStateException
from identity_service.domain.services.credential_hasher import SALT_SIZE_BYTES


@dataclass
class Identity:
    """
    Identity domain entity: the durable credential record of one registered user.

    This is a pure Python class with NO dependencies on SQLAlchemy,
    FastAPI, or any framework.

    Invariants:
    - id is assigned once at creation and never changes
    - handle and email are stored normalized (see domain.services.identifiers)
    - salt is exactly SALT_SIZE_BYTES long
    - credential_hash is always derived from the current password and the
      current salt, so the two are only ever replaced together
    """

    id: str
    handle: str
    email: str
    salt: bytes
    credential_hash: str
    first_name: str = ""
    last_name: str = ""

    def __post_init__(self):
        """
        Validate entity invariants at construction time.

        These are structural validations - they ensure the entity can exist
        in a valid state. Violations indicate the entity cannot be created.
        """
        if not self.id:
            raise InvalidEntityStateException("Identity id is required.")

        if not self.handle:
            raise InvalidEntityStateException("Handle cannot be empty.")

        if not self.email or "@" not in self.email:
            raise InvalidEntityStateException(
                f"Invalid email address: '{self.email}'. Email must contain '@' symbol."
            )

        if len(self.salt) != SALT_SIZE_BYTES:
            raise InvalidEntityStateException(
                f"Salt must be exactly {SALT_SIZE_BYTES} bytes, got {len(self.salt)}."
            )

        if not self.credential_hash:
            raise InvalidEntityStateException(
                "Credential hash is required. Identity cannot exist without credentials."
            )

    def with_credential(
        self, credential_hash: str, salt: Optional[bytes] = None
    ) -> "Identity":
        """
        Return a copy of this identity carrying a new credential.

        Only the hash, and the salt when one is given, change; id, handle,
        email and profile fields are carried over untouched. The original
        instance is left as it was, so a failed write leaves the caller's
        view consistent with the store.

        Args:
            credential_hash: Hash derived from the new password
            salt: Salt the new hash was derived with (None keeps the current salt)

        Returns:
            New Identity instance
        """
        return replace(
            self,
            credential_hash=credential_hash,
            salt=self.salt if salt is None else salt,
        )
