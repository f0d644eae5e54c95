"""Authentication API endpoints.

Every credential endpoint answers with a `{success, message, ...}` body.
Unsuccessful outcomes keep that body and get their HTTP status from the
outcome's error_code.
"""

from fastapi import APIRouter, Depends, Response, status

from identity_service.application.dtos.auth_dto import (
    AuthResultDTO,
    ChangePasswordDTO,
    ChangePasswordResultDTO,
    LoginDTO,
    OutcomeErrorCode,
    RegisterDTO,
    RegisterResultDTO,
)
from identity_service.application.dtos.identity_dto import IdentityDTO
from identity_service.application.exceptions import UnauthorizedError
from identity_service.application.services.auth_service import AuthService
from identity_service.infrastructure.config.settings import Settings, get_settings
from identity_service.presentation.dependencies import (
    get_auth_service,
    get_current_identity,
)
from identity_service.presentation.error_codes import get_http_status_for_error_code
from identity_service.presentation.error_schemas import (
    ErrorResponse,
    ValidationErrorResponse,
)


router = APIRouter(
    prefix="/auth",
    tags=["authentication"],
    responses={
        422: {"model": ValidationErrorResponse},
        503: {"model": ErrorResponse, "description": "Credential store or entropy source unavailable"},
    },
)


def _set_failure_status(
    response: Response, error_code: OutcomeErrorCode | None
) -> None:
    if error_code is not None:
        response.status_code = get_http_status_for_error_code(error_code.value)


@router.post(
    "/register",
    response_model=RegisterResultDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new identity",
    description="Create an identity with a unique handle and email. "
    "Returns 409 with conflict_kind when either is already in use.",
)
async def register(
    dto: RegisterDTO,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
) -> RegisterResultDTO:
    """Register a new identity."""
    result = await auth_service.register(dto)
    _set_failure_status(response, result.error_code)
    return result


@router.post(
    "/login",
    response_model=AuthResultDTO,
    status_code=status.HTTP_200_OK,
    summary="Log in",
    description="Authenticate with email and password; returns the identity and a token.",
)
async def login(
    dto: LoginDTO,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> AuthResultDTO:
    """
    Authenticate and receive a JWT.

    Use the token in the Authorization header for subsequent requests.

    Raises:
        404 Not Found: Unknown email (401 INVALID_CREDENTIALS when concealed)
        401 Unauthorized: Incorrect password
    """
    result = await auth_service.authenticate(dto)
    if settings.conceal_login_failure_reason:
        result = result.concealed()
    _set_failure_status(response, result.error_code)
    return result


@router.post(
    "/password-change",
    response_model=ChangePasswordResultDTO,
    status_code=status.HTTP_200_OK,
    summary="Change password",
    description="Replace the password of the authenticated identity.",
)
async def change_password(
    dto: ChangePasswordDTO,
    response: Response,
    current_identity: IdentityDTO = Depends(get_current_identity),
    auth_service: AuthService = Depends(get_auth_service),
) -> ChangePasswordResultDTO:
    """
    Change the password of the identity the Bearer token was issued to.

    Raises:
        401 Unauthorized: Missing/invalid token, token for another handle,
            or incorrect old password
    """
    if dto.handle != current_identity.handle:
        raise UnauthorizedError("Token was not issued to this handle")

    result = await auth_service.change_password(dto)
    _set_failure_status(response, result.error_code)
    return result


@router.get(
    "/me",
    response_model=IdentityDTO,
    status_code=status.HTTP_200_OK,
    summary="Get current identity",
    description="Get the identity the Bearer token was issued to.",
)
async def get_me(
    current_identity: IdentityDTO = Depends(get_current_identity),
) -> IdentityDTO:
    """
    Get current authenticated identity.

    Requires: Authorization: Bearer <token>
    """
    return current_identity
