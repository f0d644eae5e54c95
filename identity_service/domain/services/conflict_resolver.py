"""Registration conflict classification - pure domain logic.

Fetching the existing records is the credential store's job; this module only
decides, given what was found, whether a candidate handle/email pair may be
registered.
"""

from collections.abc import Iterable
from enum import Enum

from identity_service.domain.entities.identity import Identity
from identity_service.domain.exceptions import IdentityConsistencyException
from identity_service.domain.services.identifiers import normalize_identifier


class ConflictResult(str, Enum):
    """Outcome of checking a candidate handle/email pair against the store."""

    NO_CONFLICT = "NO_CONFLICT"
    EMAIL_AND_HANDLE_TAKEN = "EMAIL_AND_HANDLE_TAKEN"
    HANDLE_TAKEN = "HANDLE_TAKEN"
    EMAIL_TAKEN = "EMAIL_TAKEN"


def classify_conflict(
    candidate_email: str,
    candidate_handle: str,
    existing: Iterable[Identity],
) -> ConflictResult:
    """
    Classify a registration attempt against the identities already stored.

    Both candidates are normalized before comparison. The handle and the
    email may be held by the same record or by two different records; either
    way both are reported as taken.

    Args:
        candidate_email: Email the user wants to register
        candidate_handle: Handle the user wants to register
        existing: Identities whose email or handle matched the candidates

    Returns:
        The ConflictResult for the pair

    Raises:
        IdentityConsistencyException: If more than one stored identity shares
            the candidate handle, or more than one shares the candidate email
    """
    email = normalize_identifier(candidate_email)
    handle = normalize_identifier(candidate_handle)

    handle_owners = set()
    email_owners = set()
    for identity in existing:
        if identity.handle == handle:
            handle_owners.add(identity.id)
        if identity.email == email:
            email_owners.add(identity.id)

    if len(handle_owners) > 1:
        raise IdentityConsistencyException(
            f"{len(handle_owners)} identities share the handle '{handle}'"
        )
    if len(email_owners) > 1:
        raise IdentityConsistencyException(
            f"{len(email_owners)} identities share the email '{email}'"
        )

    if handle_owners and email_owners:
        return ConflictResult.EMAIL_AND_HANDLE_TAKEN
    if handle_owners:
        return ConflictResult.HANDLE_TAKEN
    if email_owners:
        return ConflictResult.EMAIL_TAKEN
    return ConflictResult.NO_CONFLICT
