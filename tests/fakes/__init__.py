"""Fake implementations for testing."""

from tests.fakes.credential_hasher_fake import FakeCredentialHasher
from tests.fakes.credential_store_fake import FakeCredentialStore
from tests.fakes.token_issuer_fake import FakeTokenIssuer

__all__ = ["FakeCredentialHasher", "FakeCredentialStore", "FakeTokenIssuer"]
