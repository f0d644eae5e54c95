"""Pytest configuration and fixtures.

This file contains shared fixtures that can be used across all tests.

These fixtures follow the Dependency Inversion Principle:
- Use fake implementations (FakeCredentialHasher, FakeCredentialStore, FakeTokenIssuer)
- Tests run fast (no real PBKDF2, no database, no JWT)
- Tests are isolated (each test gets fresh fakes)
"""

import pytest

from identity_service.application.services.auth_service import AuthService
from identity_service.domain.entities.identity import Identity
from tests.fakes.credential_hasher_fake import FakeCredentialHasher
from tests.fakes.credential_store_fake import FakeCredentialStore
from tests.fakes.token_issuer_fake import FakeTokenIssuer

# Salts outside the FakeCredentialHasher counter range, so fixture identities
# never share a salt with identities created during a test.
SAMPLE_SALT = bytes([0xAA]) * 16
ANOTHER_SALT = bytes([0xBB]) * 16


@pytest.fixture
def fake_credential_hasher() -> FakeCredentialHasher:
    """
    Provide a FakeCredentialHasher for tests.

    This fake hasher is fast and predictable, making tests easier to write.
    """
    return FakeCredentialHasher()


@pytest.fixture
def fake_token_issuer() -> FakeTokenIssuer:
    """
    Provide a FakeTokenIssuer for tests.

    Tokens look like "token_<handle>_<n>" and are remembered for verification.
    """
    return FakeTokenIssuer()


@pytest.fixture
def sample_identity(fake_credential_hasher) -> Identity:
    """
    Create a registered identity whose password is "password123".

    The credential_hash uses the FakeCredentialHasher format.
    """
    return Identity(
        id="11111111-1111-1111-1111-111111111111",
        handle="alice",
        email="alice@example.com",
        salt=SAMPLE_SALT,
        credential_hash=fake_credential_hasher.hash("password123", SAMPLE_SALT),
        first_name="Alice",
        last_name="Anderson",
    )


@pytest.fixture
def another_identity(fake_credential_hasher) -> Identity:
    """Create another registered identity whose password is "password456"."""
    return Identity(
        id="22222222-2222-2222-2222-222222222222",
        handle="bob",
        email="bob@example.com",
        salt=ANOTHER_SALT,
        credential_hash=fake_credential_hasher.hash("password456", ANOTHER_SALT),
    )


@pytest.fixture
def fake_credential_store() -> FakeCredentialStore:
    """
    Provide a fresh, empty FakeCredentialStore for each test.

    This ensures tests are isolated and don't affect each other.
    """
    return FakeCredentialStore()


@pytest.fixture
def fake_credential_store_with_identities(sample_identity, another_identity):
    """
    Provide a FakeCredentialStore pre-populated with identities.

    Useful for testing operations on existing data.
    """
    return FakeCredentialStore(initial_identities=[sample_identity, another_identity])


@pytest.fixture
def auth_service(fake_credential_store, fake_credential_hasher, fake_token_issuer):
    """
    Provide an AuthService instance with fake dependencies.

    This allows testing the service layer in isolation:
    - No database (FakeCredentialStore)
    - No real crypto (FakeCredentialHasher)
    - No JWT (FakeTokenIssuer)
    """
    return AuthService(
        credential_store=fake_credential_store,
        credential_hasher=fake_credential_hasher,
        token_issuer=fake_token_issuer,
    )


@pytest.fixture
def auth_service_with_data(
    fake_credential_store_with_identities, fake_credential_hasher, fake_token_issuer
):
    """
    Provide an AuthService with pre-populated data.

    Useful for testing operations on existing identities.
    """
    return AuthService(
        credential_store=fake_credential_store_with_identities,
        credential_hasher=fake_credential_hasher,
        token_issuer=fake_token_issuer,
    )
