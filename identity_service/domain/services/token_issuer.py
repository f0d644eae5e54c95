"""Token issuer interface - domain layer abstraction.

Issuing a token after a successful login is a business requirement; the
format (JWT, opaque tokens), the signing keys and the library used are not.
"""

from abc import ABC, abstractmethod
from datetime import UTC, datetime

from identity_service.domain.entities.identity import Identity


class TokenData:
    """
    Domain representation of decoded token data.

    This is a pure domain object with no framework dependencies.
    """

    def __init__(
        self,
        identity_id: str,
        handle: str,
        email: str,
        issued_at: datetime,
        expires_at: datetime,
        token_id: str | None = None,
    ):
        self.identity_id = identity_id
        self.handle = handle
        self.email = email
        self.issued_at = issued_at
        self.expires_at = expires_at
        self.token_id = token_id

    @property
    def is_expired(self) -> bool:
        """Check if token is expired."""
        return datetime.now(UTC) > self.expires_at


class ITokenIssuer(ABC):
    """
    Interface for issuing and checking session tokens.

    AuthService calls issue_token exactly once per successful authentication.
    """

    @abstractmethod
    def issue_token(self, identity: Identity) -> str:
        """
        Issue an opaque signed token for a verified identity.

        Args:
            identity: The identity whose password was just verified

        Returns:
            Encoded token string
        """
        pass

    @abstractmethod
    def verify_token(self, token: str) -> TokenData | None:
        """
        Verify and decode a token previously issued by issue_token.

        Args:
            token: Encoded token string to verify

        Returns:
            TokenData if token is valid, None if invalid/expired
        """
        pass
