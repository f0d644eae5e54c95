"""Authentication service - application layer business logic.

This service orchestrates the credential lifecycle:
1. Register (conflict check + salted hashing + single upsert)
2. Authenticate (lookup by email + constant-time verify + token issue)
3. Change password (verify old password + re-hash + single upsert)

DEPENDENCY INVERSION in action:
- AuthService depends on ICredentialStore (abstraction)
- AuthService depends on ICredentialHasher (abstraction)
- AuthService depends on ITokenIssuer (abstraction)
- No dependencies on SQLAlchemy, hashlib or PyJWT

Expected failures come back as typed outcome DTOs. Storage and entropy
faults are raised and propagate to the caller untouched.
"""

import asyncio
import logging
import uuid

from identity_service.application.dtos.auth_dto import (
    AuthResultDTO,
    ChangePasswordDTO,
    ChangePasswordResultDTO,
    LoginDTO,
    RegisterDTO,
    RegisterResultDTO,
)
from identity_service.application.dtos.identity_dto import IdentityDTO
from identity_service.application.exceptions import (
    IdentifierValidationError,
    UserNotFoundError,
)
from identity_service.application.services.identity_conflict_resolver import (
    IdentityConflictResolver,
)
from identity_service.domain.entities.identity import Identity
from identity_service.domain.exceptions import (
    DuplicateIdentityException,
    IdentityConsistencyException,
)
from identity_service.domain.repositories.credential_store import (
    ICredentialStore,
    IdentityFilter,
)
from identity_service.domain.services.conflict_resolver import ConflictResult
from identity_service.domain.services.credential_hasher import ICredentialHasher
from identity_service.domain.services.identifiers import (
    is_valid_email,
    is_valid_handle,
    normalize_identifier,
)
from identity_service.domain.services.token_issuer import ITokenIssuer

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication flow encapsulating the register, login and
    password-change use cases.

    Every operation is an independent request-response unit. The service
    keeps no per-request state; everything durable lives behind the
    injected credential store.

    Testing:
    - Unit tests use FakeCredentialStore, FakeCredentialHasher, FakeTokenIssuer
    - No database, PBKDF2 or PyJWT required in unit tests
    """

    def __init__(
        self,
        credential_store: ICredentialStore,
        credential_hasher: ICredentialHasher,
        token_issuer: ITokenIssuer,
        rotate_salt_on_password_change: bool = True,
    ):
        """
        Initialize auth service with dependencies.

        Args:
            credential_store: Keyed identity store (abstraction)
            credential_hasher: Salted password hasher (abstraction)
            token_issuer: Session token issuer (abstraction)
            rotate_salt_on_password_change: Generate a fresh salt on every
                password change. False keeps the identity's original salt,
                which is only meant for compatibility with records that
                must stay bit-for-bit identical to the legacy behavior.
        """
        self._credential_store = credential_store
        self._credential_hasher = credential_hasher
        self._token_issuer = token_issuer
        self._conflict_resolver = IdentityConflictResolver(credential_store)
        self._rotate_salt_on_password_change = rotate_salt_on_password_change

        if not rotate_salt_on_password_change:
            logger.warning(
                "Salt rotation on password change is disabled; "
                "changed passwords keep the identity's original salt"
            )

    async def register(self, dto: RegisterDTO) -> RegisterResultDTO:
        """
        Register a new identity.

        Business rules:
        1. Handle and email are normalized and must be well-formed
        2. Neither may already be in use
        3. The password is stored only as a salted PBKDF2 hash
        4. At most one upsert, and only after every check has passed

        Args:
            dto: Registration data

        Returns:
            RegisterResultDTO; on conflict, success=False with conflict_kind set

        Raises:
            IdentifierValidationError: If the handle or email is malformed
            EntropySourceUnavailableException: If no salt can be generated
            StorageUnavailableException: If the store fails
        """
        handle = self._normalized_handle(dto.handle)
        email = self._normalized_email(dto.email)

        conflict = await self._conflict_resolver.check_conflict(email, handle)
        if conflict != ConflictResult.NO_CONFLICT:
            return RegisterResultDTO.conflict(conflict)

        salt = self._credential_hasher.generate_salt()
        credential_hash = await self._hash(dto.password, salt)

        identity = Identity(
            id=str(uuid.uuid4()),
            handle=handle,
            email=email,
            salt=salt,
            credential_hash=credential_hash,
            first_name=dto.first_name,
            last_name=dto.last_name,
        )

        try:
            await self._credential_store.upsert(handle, identity)
        except DuplicateIdentityException:
            # A concurrent registration won the race past the pre-check
            conflict = await self._conflict_resolver.check_conflict(email, handle)
            if conflict == ConflictResult.NO_CONFLICT:
                raise
            return RegisterResultDTO.conflict(conflict)

        logger.info(f"Registered identity {identity.id} with handle {handle!r}")
        return RegisterResultDTO.created()

    async def authenticate(self, dto: LoginDTO) -> AuthResultDTO:
        """
        Authenticate an email/password pair and issue a token.

        Business logic:
        1. Look up the identity by normalized email
        2. Verify the password against its salt and hash
        3. On success, issue exactly one token

        "Email not found" and "wrong password" stay distinct here; the
        calling layer decides how much of that to reveal.

        Args:
            dto: Login credentials

        Returns:
            AuthResultDTO with identity and token on success

        Raises:
            IdentityConsistencyException: If several identities share the email
            StorageUnavailableException: If the store fails
        """
        email = normalize_identifier(dto.email)

        matches = await self._credential_store.fetch_where(IdentityFilter(email=email))
        if not matches:
            logger.info(f"Login attempt for unknown email {email!r}")
            return AuthResultDTO.user_not_found()
        if len(matches) > 1:
            raise IdentityConsistencyException(
                f"{len(matches)} identities share the email '{email}'"
            )

        identity = matches[0]
        if not await self._verify(dto.password, identity):
            logger.warning(f"Incorrect password for identity {identity.id}")
            return AuthResultDTO.incorrect_password()

        token = self._token_issuer.issue_token(identity)
        return AuthResultDTO.authenticated(IdentityDTO.from_entity(identity), token)

    async def change_password(self, dto: ChangePasswordDTO) -> ChangePasswordResultDTO:
        """
        Change the password of the identity stored under a handle.

        Args:
            dto: Handle plus old and new passwords

        Returns:
            ChangePasswordResultDTO

        Raises:
            IdentifierValidationError: If the handle is malformed
            EntropySourceUnavailableException: If no new salt can be generated
            StorageUnavailableException: If the store fails
        """
        handle = self._normalized_handle(dto.handle)

        identity = await self._credential_store.fetch_by_key(handle)
        if identity is None:
            return ChangePasswordResultDTO.user_not_found()

        return await self.change_identity_password(
            identity, dto.old_password, dto.new_password
        )

    async def change_identity_password(
        self, identity: Identity, old_password: str, new_password: str
    ) -> ChangePasswordResultDTO:
        """
        Rotate the credential of an already loaded identity.

        Business rules:
        1. The old password must verify; otherwise nothing is written
        2. The new hash is derived with a fresh salt (or the existing one
           in legacy mode) and replaces the old hash
        3. Every other field is carried over untouched
        4. A failing store write propagates; it is never reported as a
           plain unsuccessful outcome

        Args:
            identity: The identity as currently stored
            old_password: Current plain text password
            new_password: New plain text password

        Returns:
            ChangePasswordResultDTO
        """
        if not await self._verify(old_password, identity):
            logger.warning(f"Password change rejected for identity {identity.id}")
            return ChangePasswordResultDTO.incorrect_password()

        if self._rotate_salt_on_password_change:
            salt = self._credential_hasher.generate_salt()
        else:
            salt = identity.salt

        credential_hash = await self._hash(new_password, salt)
        updated = identity.with_credential(credential_hash, salt)

        await self._credential_store.upsert(updated.handle, updated)

        logger.info(f"Password changed for identity {identity.id}")
        return ChangePasswordResultDTO.changed()

    async def get_identity(self, handle: str) -> IdentityDTO:
        """
        Get the public view of the identity stored under a handle.

        Used by the bearer-token dependency to resolve the current caller.

        Raises:
            UserNotFoundError: If no identity is stored under the handle
        """
        identity = await self._credential_store.fetch_by_key(
            normalize_identifier(handle)
        )
        if identity is None:
            raise UserNotFoundError(f"User {handle!r} not found")

        return IdentityDTO.from_entity(identity)

    async def _hash(self, password: str, salt: bytes) -> str:
        # Key derivation is deliberately slow; keep it off the event loop
        return await asyncio.to_thread(self._credential_hasher.hash, password, salt)

    async def _verify(self, password: str, identity: Identity) -> bool:
        return await asyncio.to_thread(
            self._credential_hasher.verify,
            password,
            identity.salt,
            identity.credential_hash,
        )

    @staticmethod
    def _normalized_handle(handle: str) -> str:
        normalized = normalize_identifier(handle)
        if not is_valid_handle(normalized):
            raise IdentifierValidationError(f"Invalid handle: {handle!r}")
        return normalized

    @staticmethod
    def _normalized_email(email: str) -> str:
        normalized = normalize_identifier(email)
        if not is_valid_email(normalized):
            raise IdentifierValidationError(f"Invalid email address: {email!r}")
        return normalized
