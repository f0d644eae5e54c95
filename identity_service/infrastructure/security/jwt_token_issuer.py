"""JWT token issuer implementation using PyJWT.

This is an INFRASTRUCTURE detail. The domain layer (ITokenIssuer interface)
defines WHAT we need (issue a token for a verified identity, check it
later), while this implementation defines HOW (signed JWT via PyJWT).
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import InvalidTokenError

from identity_service.domain.entities.identity import Identity
from identity_service.domain.services.token_issuer import ITokenIssuer, TokenData


class JWTTokenIssuer(ITokenIssuer):
    """
    Production token issuer using JWT (JSON Web Tokens) via PyJWT.

    Payload claims:
    - sub: identity id
    - handle, email: identifiers of the identity
    - iat / exp: issued-at and expiration
    - jti: unique token identifier
    - type: "access"

    Security Considerations:
    - Uses HS256 (HMAC with SHA-256) for signing by default
    - Secret key must be at least 32 characters (enforced here and in Settings)
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 30,
    ):
        """
        Initialize JWT token issuer.

        Args:
            secret_key: Secret key for signing tokens (min 32 characters)
            algorithm: JWT signing algorithm (default: HS256)
            access_token_expire_minutes: Token lifetime in minutes

        Raises:
            ValueError: If secret_key is too short
        """
        if len(secret_key) < 32:
            raise ValueError("Secret key must be at least 32 characters long")

        self._secret_key = secret_key
        self._algorithm = algorithm
        self._access_token_expire_minutes = access_token_expire_minutes

    def issue_token(self, identity: Identity) -> str:
        """
        Issue a signed access token for a verified identity.

        Example:
            >>> issuer = JWTTokenIssuer(secret_key="x" * 32)
            >>> token = issuer.issue_token(identity)
            >>> print(token)
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.eyJzdWIiOiI..."
        """
        now = datetime.now(timezone.utc)
        expires_at = now + timedelta(minutes=self._access_token_expire_minutes)

        payload = {
            "sub": identity.id,
            "handle": identity.handle,
            "email": identity.email,
            "exp": expires_at,
            "iat": now,
            "jti": str(uuid.uuid4()),
            "type": "access",
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify_token(self, token: str) -> Optional[TokenData]:
        """
        Verify and decode a token issued by issue_token.

        Returns:
            TokenData if valid, None if invalid/expired/wrong type
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )

            if payload.get("type") != "access":
                return None

            return TokenData(
                identity_id=payload["sub"],
                handle=payload["handle"],
                email=payload["email"],
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                token_id=payload.get("jti"),
            )

        except (InvalidTokenError, ValueError, KeyError, TypeError):
            # Token is invalid, expired, or malformed
            return None
