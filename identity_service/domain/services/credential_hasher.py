"""Credential hashing interface - domain service abstraction.

This interface defines the contract for turning a plaintext password into
the durable secret stored on an Identity, and for checking a login attempt
against it.

Unlike self-describing hash formats, the salt is stored as its own field on
the Identity and the key derivation parameters are fixed system-wide
constants. Every stored hash therefore stays verifiable without per-record
metadata about how it was produced:

- PBKDF2 with HMAC-SHA256
- 100,000 iterations
- 128-bit salt, 256-bit derived key, stored base64-encoded
"""

from abc import ABC, abstractmethod

SALT_SIZE_BYTES = 16
DERIVED_KEY_SIZE_BYTES = 32
PBKDF2_ITERATIONS = 100_000


class ICredentialHasher(ABC):
    """
    Interface for salted password hashing and verification.

    Implementations must draw salts from a cryptographically secure source
    and compare hashes in constant time.
    """

    @abstractmethod
    def generate_salt(self) -> bytes:
        """
        Generate a fresh random salt of SALT_SIZE_BYTES bytes.

        Returns:
            Random salt bytes

        Raises:
            EntropySourceUnavailableException: If the secure random source cannot be read
        """
        pass

    @abstractmethod
    def derive_key(self, password: str, salt: bytes) -> bytes:
        """
        Derive the DERIVED_KEY_SIZE_BYTES key for (password, salt).

        Pure and deterministic: the same inputs always yield the same output.

        Args:
            password: The plain text password
            salt: The identity's salt

        Returns:
            Derived key bytes
        """
        pass

    @abstractmethod
    def hash(self, password: str, salt: bytes) -> str:
        """
        Derive the key and encode it in its stored (base64) form.

        Args:
            password: The plain text password
            salt: The identity's salt

        Returns:
            Base64-encoded derived key
        """
        pass

    @abstractmethod
    def verify(self, password: str, salt: bytes, expected_hash: str) -> bool:
        """
        Check a plaintext password against a stored hash.

        Args:
            password: The plain text password to check
            salt: The salt the stored hash was derived with
            expected_hash: The stored base64 hash

        Returns:
            True if the password matches, False otherwise

        Example:
            salt = hasher.generate_salt()
            stored = hasher.hash("my_password", salt)

            hasher.verify("my_password", salt, stored)  # Returns: True
            hasher.verify("wrong_password", salt, stored)  # Returns: False
        """
        pass
