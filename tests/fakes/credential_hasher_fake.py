"""Fake credential hasher for testing.

Real PBKDF2 with 100,000 iterations is intentionally slow. Unit tests of the
authentication flow care about business logic (conflicts, verification
outcomes, salt rotation), not about the key derivation itself, which is
covered by the Pbkdf2CredentialHasher tests.

The fake hasher:
- Produces readable hashes that embed the salt and the password
- Produces predictable, distinct salts (a counter)
- Can simulate a failing entropy source

WHEN NOT TO USE:
Tests that verify the real key derivation should use Pbkdf2CredentialHasher.
"""

from identity_service.domain.exceptions import EntropySourceUnavailableException
from identity_service.domain.services.credential_hasher import (
    SALT_SIZE_BYTES,
    ICredentialHasher,
)


class FakeCredentialHasher(ICredentialHasher):
    """
    Fake credential hasher for unit testing.

    Usage in tests:
        hasher = FakeCredentialHasher()
        salt = hasher.generate_salt()          # b"\\x00...\\x01"
        hasher.hash("password123", salt)       # "HASHED:000...01:password123"
        hasher.verify("password123", salt, "HASHED:000...01:password123")  # True

    Security Note:
        NEVER use this in production! It is string concatenation, not crypto.
    """

    HASH_PREFIX = "HASHED:"

    def __init__(self, entropy_available: bool = True):
        self.entropy_available = entropy_available
        self.salts_generated = 0

    def generate_salt(self) -> bytes:
        """Return the next counter value as a SALT_SIZE_BYTES salt."""
        if not self.entropy_available:
            raise EntropySourceUnavailableException()

        self.salts_generated += 1
        return self.salts_generated.to_bytes(SALT_SIZE_BYTES, "big")

    def derive_key(self, password: str, salt: bytes) -> bytes:
        return f"{salt.hex()}:{password}".encode("utf-8")

    def hash(self, password: str, salt: bytes) -> str:
        return f"{self.HASH_PREFIX}{self.derive_key(password, salt).decode('utf-8')}"

    def verify(self, password: str, salt: bytes, expected_hash: str) -> bool:
        return self.hash(password, salt) == expected_hash

