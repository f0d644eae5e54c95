"""Unit tests for identifier normalization and validation."""

import pytest

from identity_service.domain.services.identifiers import (
    is_valid_email,
    is_valid_handle,
    normalize_identifier,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "raw, expected",
    [
        (" Alice@X.com ", "alice@x.com"),
        ("ALICE", "alice"),
        ("al ice", "alice"),
        ("a\tl\ni ce", "alice"),
        ("", ""),
    ],
)
def test_normalize_identifier(raw, expected):
    """Test lower-casing and removal of every whitespace character."""
    assert normalize_identifier(raw) == expected


def test_normalize_identifier_is_idempotent():
    once = normalize_identifier("  Bob.Smith @ Example.COM ")

    assert normalize_identifier(once) == once


@pytest.mark.parametrize("handle", ["alice", "a", "bob.smith", "x_1-2", "a" * 64])
def test_valid_handles(handle):
    assert is_valid_handle(handle) is True


@pytest.mark.parametrize("handle", ["", "a" * 65, "al ice", "Alice", "al@ice", "ali/ce"])
def test_invalid_handles(handle):
    assert is_valid_handle(handle) is False


@pytest.mark.parametrize("email", ["alice@x.com", "a.b+c@mail.example.org"])
def test_valid_emails(email):
    assert is_valid_email(email) is True


@pytest.mark.parametrize(
    "email",
    ["", "alice", "alice@", "@x.com", "alice@x", "a@b@x.com", "a" * 250 + "@x.com"],
)
def test_invalid_emails(email):
    assert is_valid_email(email) is False
