"""Credential store implementation using SQLAlchemy."""

import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from identity_service.domain.entities.identity import Identity
from identity_service.domain.exceptions import (
    DuplicateIdentityException,
    StorageUnavailableException,
)
from identity_service.domain.repositories.credential_store import (
    ICredentialStore,
    IdentityFilter,
)
from identity_service.infrastructure.persistence.models.identity_model import (
    IdentityModel,
)

logger = logging.getLogger(__name__)


class SqlAlchemyCredentialStore(ICredentialStore):
    """
    SQLAlchemy implementation of ICredentialStore.

    Each call opens its own session, so every upsert is one short
    transaction. The class returns domain entities and never exposes ORM
    models to the application layer. Database errors are translated into
    the domain's storage exceptions.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """
        Initialize store with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory

    async def fetch_by_key(self, key: str) -> Identity | None:
        """Get identity by its handle."""
        try:
            async with self._session_factory() as session:
                model = await session.get(IdentityModel, key)
                return model.to_entity() if model is not None else None
        except SQLAlchemyError as exc:
            logger.error(f"Failed to fetch identity {key!r}: {exc}", exc_info=True)
            raise StorageUnavailableException() from exc

    async def fetch_where(self, criteria: IdentityFilter) -> list[Identity]:
        """Get every identity whose email or handle matches the filter."""
        conditions = []
        if criteria.email is not None:
            conditions.append(IdentityModel.email == criteria.email)
        if criteria.handle is not None:
            conditions.append(IdentityModel.handle == criteria.handle)

        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(IdentityModel).where(or_(*conditions))
                )
                return [model.to_entity() for model in result.scalars().all()]
        except SQLAlchemyError as exc:
            logger.error(f"Failed to query identities: {exc}", exc_info=True)
            raise StorageUnavailableException() from exc

    async def upsert(self, key: str, identity: Identity) -> Identity:
        """
        Insert or update the identity stored under its handle.

        An existing row may only be replaced by the same identity (same id);
        anything else is a duplicate registration.
        """
        if key != identity.handle:
            raise ValueError(
                f"Store key {key!r} does not match identity handle {identity.handle!r}"
            )

        try:
            async with self._session_factory() as session:
                async with session.begin():
                    model = await session.get(IdentityModel, key)
                    if model is None:
                        session.add(IdentityModel.from_entity(identity))
                    elif model.id != identity.id:
                        raise DuplicateIdentityException(
                            f"Handle {key!r} belongs to another identity"
                        )
                    else:
                        model.apply(identity)
        except IntegrityError as exc:
            logger.warning(f"Uniqueness violation writing identity {identity.id}: {exc}")
            raise DuplicateIdentityException(
                f"Handle {key!r} or its email is already registered"
            ) from exc
        except SQLAlchemyError as exc:
            logger.error(f"Failed to write identity {identity.id}: {exc}", exc_info=True)
            raise StorageUnavailableException() from exc

        return identity
