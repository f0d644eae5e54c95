"""PBKDF2 credential hasher implementation.

This is an INFRASTRUCTURE detail. The domain layer (ICredentialHasher
interface) defines WHAT we need (salt, derive, verify), while this
implementation defines HOW we do it (PBKDF2-HMAC-SHA256 from hashlib).

Dependency flow:
    AuthService (application) → ICredentialHasher (domain) ← Pbkdf2CredentialHasher (infrastructure)
"""

import base64
import hashlib
import hmac
import secrets

from identity_service.domain.exceptions import EntropySourceUnavailableException
from identity_service.domain.services.credential_hasher import (
    DERIVED_KEY_SIZE_BYTES,
    PBKDF2_ITERATIONS,
    SALT_SIZE_BYTES,
    ICredentialHasher,
)


class Pbkdf2CredentialHasher(ICredentialHasher):
    """
    Production credential hasher using PBKDF2 with HMAC-SHA256.

    Configuration (fixed, shared by every stored hash):
    - PRF: HMAC-SHA256
    - Iterations: 100,000
    - Salt: 16 bytes from the OS CSPRNG (secrets)
    - Derived key: 32 bytes, stored base64-encoded

    Usage:
        hasher = Pbkdf2CredentialHasher()

        salt = hasher.generate_salt()
        stored = hasher.hash("user_password_123", salt)
        # Returns: 44-character base64 string

        hasher.verify("user_password_123", salt, stored)  # True
        hasher.verify("wrong_password", salt, stored)  # False
    """

    def generate_salt(self) -> bytes:
        """
        Generate a 16-byte salt from the OS CSPRNG.

        Raises:
            EntropySourceUnavailableException: If the OS random source fails
        """
        try:
            return secrets.token_bytes(SALT_SIZE_BYTES)
        except (OSError, NotImplementedError) as exc:
            raise EntropySourceUnavailableException() from exc

    def derive_key(self, password: str, salt: bytes) -> bytes:
        """Derive the 32-byte PBKDF2-HMAC-SHA256 key for (password, salt)."""
        return hashlib.pbkdf2_hmac(
            "sha256",
            password.encode("utf-8"),
            salt,
            PBKDF2_ITERATIONS,
            dklen=DERIVED_KEY_SIZE_BYTES,
        )

    def hash(self, password: str, salt: bytes) -> str:
        """Derive the key and base64-encode it for storage."""
        return base64.b64encode(self.derive_key(password, salt)).decode("ascii")

    def verify(self, password: str, salt: bytes, expected_hash: str) -> bool:
        """
        Verify a password against a stored base64 hash.

        Security Notes:
        - Compares the stored base64 text with hmac.compare_digest (constant time)
        - Only the exact canonical encoding matches; a corrupted or
          re-encoded stored hash verifies as False
        """
        return hmac.compare_digest(
            self.hash(password, salt).encode("utf-8"), expected_hash.encode("utf-8")
        )
