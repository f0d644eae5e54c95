"""Normalization and validation of the identifiers an identity is looked up by.

Handles and emails are compared case-insensitively with all whitespace
removed. The same normalization must run at registration and at every
later lookup, because the store is keyed by the normalized handle.
"""

import re

_WHITESPACE = re.compile(r"\s+")
_HANDLE_PATTERN = re.compile(r"^[a-z0-9._-]{1,64}$")
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s.]+$")

MAX_EMAIL_LENGTH = 254


def normalize_identifier(value: str) -> str:
    """
    Lower-case a handle or email and strip every whitespace character.

    Idempotent: normalize_identifier(normalize_identifier(x)) == normalize_identifier(x).

    Example:
        >>> normalize_identifier(" Alice@X.com ")
        'alice@x.com'
    """
    return _WHITESPACE.sub("", value.lower())


def is_valid_handle(handle: str) -> bool:
    """Check a normalized handle: 1-64 chars of a-z, 0-9, '.', '_' or '-'."""
    return bool(_HANDLE_PATTERN.match(handle))


def is_valid_email(email: str) -> bool:
    """Check a normalized email has a single '@' and a dotted domain."""
    return len(email) <= MAX_EMAIL_LENGTH and bool(_EMAIL_PATTERN.match(email))
