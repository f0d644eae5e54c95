"""FastAPI dependency injection setup.

This module is the COMPOSITION ROOT - where we wire up dependencies.

This is where we decide:
- Use Pbkdf2CredentialHasher for passwords
- Use SqlAlchemyCredentialStore over PostgreSQL for identities
- Use JWTTokenIssuer for session tokens
- Use Settings from environment (not hardcoded config)

The application layer doesn't know or care about these choices - it only
knows about interfaces. Tests override get_session_factory (or any other
provider) through app.dependency_overrides.
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from identity_service.application.dtos.identity_dto import IdentityDTO
from identity_service.application.exceptions import InvalidTokenError
from identity_service.application.services.auth_service import AuthService
from identity_service.domain.repositories.credential_store import ICredentialStore
from identity_service.domain.services.credential_hasher import ICredentialHasher
from identity_service.domain.services.token_issuer import ITokenIssuer
from identity_service.infrastructure.config.settings import Settings, get_settings
from identity_service.infrastructure.persistence.database import (
    create_database_engine,
    create_session_factory,
)
from identity_service.infrastructure.repositories.credential_store_impl import (
    SqlAlchemyCredentialStore,
)
from identity_service.infrastructure.security.jwt_token_issuer import JWTTokenIssuer
from identity_service.infrastructure.security.pbkdf2_credential_hasher import (
    Pbkdf2CredentialHasher,
)


# Module-level singletons (created once, reused throughout app lifecycle)
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker | None = None


def get_database_engine(settings: Settings = Depends(get_settings)) -> AsyncEngine:
    """Get or create database engine singleton."""
    global _engine
    if _engine is None:
        _engine = create_database_engine(settings)
    return _engine


def get_session_factory(
    engine: AsyncEngine = Depends(get_database_engine),
) -> async_sessionmaker:
    """Get or create session factory singleton."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(engine)
    return _session_factory


def get_credential_store(
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> ICredentialStore:
    """
    Dependency that provides the credential store.

    Dependency chain:
        get_settings() → get_database_engine() → get_session_factory() → get_credential_store()
    """
    return SqlAlchemyCredentialStore(session_factory)


def get_credential_hasher() -> ICredentialHasher:
    """
    Dependency that provides the credential hasher.

    The hasher is stateless, so a new instance per request is fine.

    Note:
        In tests, this dependency can be overridden with FakeCredentialHasher:

        app.dependency_overrides[get_credential_hasher] = lambda: FakeCredentialHasher()
    """
    return Pbkdf2CredentialHasher()


def get_token_issuer(settings: Settings = Depends(get_settings)) -> ITokenIssuer:
    """Dependency that provides a JWTTokenIssuer configured from settings."""
    return JWTTokenIssuer(
        secret_key=settings.secret_key,
        algorithm=settings.algorithm,
        access_token_expire_minutes=settings.access_token_expire_minutes,
    )


def get_auth_service(
    credential_store: ICredentialStore = Depends(get_credential_store),
    credential_hasher: ICredentialHasher = Depends(get_credential_hasher),
    token_issuer: ITokenIssuer = Depends(get_token_issuer),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    """
    Dependency that provides AuthService.

    Dependency Graph:
        FastAPI endpoint
            → get_auth_service()
                → get_credential_store() → get_session_factory() → Settings
                → get_credential_hasher() → Pbkdf2CredentialHasher
                → get_token_issuer() → Settings
    """
    return AuthService(
        credential_store=credential_store,
        credential_hasher=credential_hasher,
        token_issuer=token_issuer,
        rotate_salt_on_password_change=settings.rotate_salt_on_password_change,
    )


# auto_error=False allows us to return 401 instead of 403 when credentials are missing
security = HTTPBearer(auto_error=False)


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    token_issuer: ITokenIssuer = Depends(get_token_issuer),
    auth_service: AuthService = Depends(get_auth_service),
) -> IdentityDTO:
    """
    Dependency that extracts and validates the current identity from a Bearer token.

    Usage in endpoints:
        @router.get("/me")
        async def get_me(current: IdentityDTO = Depends(get_current_identity)):
            return current

    Raises:
        InvalidTokenError: If token is missing, invalid or expired
        UserNotFoundError: If the token's identity no longer exists
    """
    if credentials is None:
        raise InvalidTokenError("Missing authorization credentials")

    token_data = token_issuer.verify_token(credentials.credentials)
    if token_data is None or token_data.is_expired:
        raise InvalidTokenError("Invalid or expired access token")

    identity = await auth_service.get_identity(token_data.handle)
    if identity.id != token_data.identity_id:
        raise InvalidTokenError("Token does not match a current identity")

    return identity
