"""Data Transfer Objects for application layer."""

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

__all__ = [
    "AuthResultDTO",
    "ChangePasswordDTO",
    "ChangePasswordResultDTO",
    "IdentityDTO",
    "LoginDTO",
    "OutcomeErrorCode",
    "RegisterDTO",
    "RegisterResultDTO",
]
