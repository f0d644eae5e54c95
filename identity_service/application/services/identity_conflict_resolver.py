"""Identity conflict resolver - decides whether a registration may proceed."""

import logging

from identity_service.domain.repositories.credential_store import (
    ICredentialStore,
    IdentityFilter,
)
from identity_service.domain.services.conflict_resolver import (
    ConflictResult,
    classify_conflict,
)
from identity_service.domain.services.identifiers import normalize_identifier

logger = logging.getLogger(__name__)


class IdentityConflictResolver:
    """
    Looks up identities holding a candidate handle or email and classifies
    the result.

    The check is a best-effort, low-latency pre-filter. It is not atomic with
    the following write; the store's uniqueness constraints are what finally
    keep handles and emails unique.
    """

    def __init__(self, credential_store: ICredentialStore):
        self._credential_store = credential_store

    async def check_conflict(
        self, candidate_email: str, candidate_handle: str
    ) -> ConflictResult:
        """
        Check a candidate email/handle pair against the store.

        Args:
            candidate_email: Email to register (normalized here)
            candidate_handle: Handle to register (normalized here)

        Returns:
            ConflictResult for the pair

        Raises:
            IdentityConsistencyException: If the store holds duplicates
            StorageUnavailableException: If the store query fails
        """
        email = normalize_identifier(candidate_email)
        handle = normalize_identifier(candidate_handle)

        existing = await self._credential_store.fetch_where(
            IdentityFilter(email=email, handle=handle)
        )
        result = classify_conflict(email, handle, existing)

        if result != ConflictResult.NO_CONFLICT:
            logger.info(
                f"Registration conflict for handle={handle!r} email={email!r}: "
                f"{result.value}"
            )

        return result
