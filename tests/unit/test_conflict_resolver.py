"""Unit tests for registration conflict classification.

Covers both the pure classify_conflict function and the
IdentityConflictResolver that feeds it from the credential store.
"""

import pytest

from identity_service.application.services.identity_conflict_resolver import (
    IdentityConflictResolver,
)
from identity_service.domain.entities.identity import Identity
from identity_service.domain.exceptions import (
    IdentityConsistencyException,
    StorageUnavailableException,
)
from identity_service.domain.services.conflict_resolver import (
    ConflictResult,
    classify_conflict,
)
from tests.fakes.credential_store_fake import FakeCredentialStore

pytestmark = pytest.mark.unit


def make_identity(id: str, handle: str, email: str) -> Identity:
    return Identity(
        id=id,
        handle=handle,
        email=email,
        salt=bytes(16),
        credential_hash="HASHED:irrelevant",
    )


# === classify_conflict ===


def test_no_existing_identities_is_no_conflict():
    assert classify_conflict("alice@x.com", "alice", []) == ConflictResult.NO_CONFLICT


def test_same_record_holding_both_is_email_and_handle_taken():
    existing = [make_identity("1", "alice", "alice@x.com")]

    assert (
        classify_conflict("alice@x.com", "alice", existing)
        == ConflictResult.EMAIL_AND_HANDLE_TAKEN
    )


def test_two_records_holding_one_each_is_email_and_handle_taken():
    """Test handle owned by one identity and email by another still reports both."""
    existing = [
        make_identity("1", "alice", "someone@x.com"),
        make_identity("2", "bob", "alice@x.com"),
    ]

    assert (
        classify_conflict("alice@x.com", "alice", existing)
        == ConflictResult.EMAIL_AND_HANDLE_TAKEN
    )


def test_handle_taken():
    existing = [make_identity("1", "alice", "other@x.com")]

    assert classify_conflict("alice@x.com", "alice", existing) == ConflictResult.HANDLE_TAKEN


def test_email_taken():
    existing = [make_identity("1", "other", "alice@x.com")]

    assert classify_conflict("alice@x.com", "alice", existing) == ConflictResult.EMAIL_TAKEN


def test_candidates_are_normalized_before_comparison():
    """Test " Alice@X.com " collides with the stored "alice@x.com"."""
    existing = [make_identity("1", "other", "alice@x.com")]

    assert classify_conflict(" Alice@X.com ", "NEW", existing) == ConflictResult.EMAIL_TAKEN


def test_unrelated_records_are_ignored():
    existing = [make_identity("1", "carol", "carol@x.com")]

    assert classify_conflict("alice@x.com", "alice", existing) == ConflictResult.NO_CONFLICT


def test_duplicate_handle_owners_raise_consistency_error():
    existing = [
        make_identity("1", "alice", "a1@x.com"),
        make_identity("2", "alice", "a2@x.com"),
    ]

    with pytest.raises(IdentityConsistencyException) as exc_info:
        classify_conflict("new@x.com", "alice", existing)

    assert exc_info.value.error_code == "IDENTITY_CONSISTENCY_ERROR"


def test_duplicate_email_owners_raise_consistency_error():
    existing = [
        make_identity("1", "a1", "alice@x.com"),
        make_identity("2", "a2", "alice@x.com"),
    ]

    with pytest.raises(IdentityConsistencyException):
        classify_conflict("alice@x.com", "new", existing)


# === IdentityConflictResolver ===


@pytest.mark.asyncio
async def test_resolver_queries_store_with_normalized_candidates():
    store = FakeCredentialStore([make_identity("1", "alice", "alice@x.com")])
    resolver = IdentityConflictResolver(store)

    result = await resolver.check_conflict(" ALICE@x.com", "Alice ")

    assert result == ConflictResult.EMAIL_AND_HANDLE_TAKEN


@pytest.mark.asyncio
async def test_resolver_no_conflict_on_empty_store():
    resolver = IdentityConflictResolver(FakeCredentialStore())

    assert await resolver.check_conflict("alice@x.com", "alice") == ConflictResult.NO_CONFLICT


@pytest.mark.asyncio
async def test_resolver_propagates_storage_failure():
    store = FakeCredentialStore()
    store.fail_reads = True
    resolver = IdentityConflictResolver(store)

    with pytest.raises(StorageUnavailableException):
        await resolver.check_conflict("alice@x.com", "alice")
