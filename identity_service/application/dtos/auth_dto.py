"""Authentication DTOs for the application layer.

Requests are validated with pydantic. Handles and emails are normalized
(lower-cased, whitespace removed) before validation so that " Alice@X.com "
and "alice@x.com" are the same identifier everywhere.

Results are typed outcomes: conflicts, unknown emails and wrong passwords are
expected answers and travel back as `success=False` with an `error_code`,
never as exceptions.
"""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field

from identity_service.application.dtos.identity_dto import IdentityDTO
from identity_service.domain.services.conflict_resolver import ConflictResult
from identity_service.domain.services.identifiers import normalize_identifier


def normalize(v: Any) -> Any:
    """Normalize string identifiers; leave other input for pydantic to reject."""
    return normalize_identifier(v) if isinstance(v, str) else v


Handle = Annotated[
    str,
    BeforeValidator(normalize),
    Field(min_length=1, max_length=64, pattern=r"^[a-z0-9._-]+$"),
]
NormalizedEmail = Annotated[EmailStr, BeforeValidator(normalize)]
Password = Annotated[str, Field(min_length=1)]
ProfileName = Annotated[str, Field(max_length=100)]


class OutcomeErrorCode(str, Enum):
    """Machine-readable reason carried by an unsuccessful outcome."""

    IDENTITY_CONFLICT = "IDENTITY_CONFLICT"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    INCORRECT_PASSWORD = "INCORRECT_PASSWORD"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"


CONFLICT_MESSAGES = {
    ConflictResult.EMAIL_AND_HANDLE_TAKEN: "Email address and handle already in use",
    ConflictResult.HANDLE_TAKEN: "Handle already in use",
    ConflictResult.EMAIL_TAKEN: "Email address already in use",
}


class RegisterDTO(BaseModel):
    """
    DTO for registering a new identity.

    Validation:
    - handle: normalized, 1-64 chars of a-z, 0-9, '.', '_' or '-'
    - email: normalized, must be a valid email address (EmailStr)
    - password: must not be empty; it is hashed and never stored as given
    - first_name, last_name: optional, at most 100 chars
    """

    handle: Handle
    email: NormalizedEmail
    password: Password
    first_name: ProfileName = ""
    last_name: ProfileName = ""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "handle": "alice",
                "email": "alice@example.com",
                "password": "Secr3t!",
                "first_name": "Alice",
                "last_name": "Anderson",
            }
        }
    )


class LoginDTO(BaseModel):
    """DTO for a login attempt."""

    email: NormalizedEmail = Field(..., description="Registered email address")
    password: Password = Field(..., description="Plain text password")

    model_config = {
        "json_schema_extra": {
            "examples": [{"email": "alice@example.com", "password": "Secr3t!"}]
        }
    }


class ChangePasswordDTO(BaseModel):
    """DTO for rotating the password of an identity, addressed by handle."""

    handle: Handle
    old_password: Password
    new_password: Password

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "handle": "alice",
                "old_password": "Secr3t!",
                "new_password": "N3wSecr3t!",
            }
        }
    )


class RegisterResultDTO(BaseModel):
    """Outcome of a registration attempt."""

    success: bool
    message: str
    conflict_kind: ConflictResult | None = None
    error_code: OutcomeErrorCode | None = None

    @classmethod
    def created(cls) -> "RegisterResultDTO":
        return cls(success=True, message="User created")

    @classmethod
    def conflict(cls, kind: ConflictResult) -> "RegisterResultDTO":
        """Build the failure outcome for a handle and/or email already in use."""
        if kind == ConflictResult.NO_CONFLICT:
            raise ValueError("A conflict outcome needs an actual conflict")
        return cls(
            success=False,
            message=CONFLICT_MESSAGES[kind],
            conflict_kind=kind,
            error_code=OutcomeErrorCode.IDENTITY_CONFLICT,
        )


class AuthResultDTO(BaseModel):
    """Outcome of a login attempt; carries the identity and token on success."""

    success: bool
    message: str
    error_code: OutcomeErrorCode | None = None
    identity: IdentityDTO | None = None
    token: str | None = None

    @classmethod
    def authenticated(cls, identity: IdentityDTO, token: str) -> "AuthResultDTO":
        return cls(
            success=True,
            message="User found and logged in successfully",
            identity=identity,
            token=token,
        )

    @classmethod
    def user_not_found(cls) -> "AuthResultDTO":
        return cls(
            success=False,
            message="Email address not found",
            error_code=OutcomeErrorCode.USER_NOT_FOUND,
        )

    @classmethod
    def incorrect_password(cls) -> "AuthResultDTO":
        return cls(
            success=False,
            message="Incorrect password",
            error_code=OutcomeErrorCode.INCORRECT_PASSWORD,
        )

    def concealed(self) -> "AuthResultDTO":
        """
        Collapse "unknown email" and "wrong password" into one answer.

        Both stay distinct inside the service; the calling layer decides
        whether a client may tell them apart.
        """
        if self.error_code not in (
            OutcomeErrorCode.USER_NOT_FOUND,
            OutcomeErrorCode.INCORRECT_PASSWORD,
        ):
            return self
        return AuthResultDTO(
            success=False,
            message="Invalid email or password",
            error_code=OutcomeErrorCode.INVALID_CREDENTIALS,
        )


class ChangePasswordResultDTO(BaseModel):
    """Outcome of a password change."""

    success: bool
    message: str
    error_code: OutcomeErrorCode | None = None

    @classmethod
    def changed(cls) -> "ChangePasswordResultDTO":
        return cls(success=True, message="Password changed successfully")

    @classmethod
    def user_not_found(cls) -> "ChangePasswordResultDTO":
        return cls(
            success=False,
            message="User not found",
            error_code=OutcomeErrorCode.USER_NOT_FOUND,
        )

    @classmethod
    def incorrect_password(cls) -> "ChangePasswordResultDTO":
        return cls(
            success=False,
            message="Incorrect password",
            error_code=OutcomeErrorCode.INCORRECT_PASSWORD,
        )
