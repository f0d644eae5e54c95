"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from identity_service.application.exceptions import ApplicationError
from identity_service.domain.exceptions import DomainException
from identity_service.infrastructure.config.settings import get_settings
from identity_service.infrastructure.persistence.database import create_tables
from identity_service.presentation import dependencies
from identity_service.presentation.api.v1 import auth
from identity_service.presentation.exception_handlers import (
    application_error_handler,
    domain_exception_handler,
    generic_exception_handler,
    validation_error_handler,
)


# Get settings for app configuration
_settings = get_settings()

logging.basicConfig(
    level=_settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the identities table on startup when it is missing."""
    if _settings.db_create_tables_on_startup:
        await create_tables(dependencies.get_database_engine(_settings))
    yield


app = FastAPI(
    title=_settings.app_name,
    description="Identity credential service: register, authenticate and change passwords",
    version=_settings.app_version,
    debug=_settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# - ApplicationError handles ALL application layer exceptions
# - DomainException handles ALL domain layer exceptions, storage and entropy faults included
# - RequestValidationError handles Pydantic validation errors
# - Exception handles everything else
app.add_exception_handler(ApplicationError, application_error_handler)  # type: ignore[arg-type]
app.add_exception_handler(DomainException, domain_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, generic_exception_handler)

app.include_router(auth.router, prefix="/api/v1")


@app.get("/")
async def root() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "message": _settings.app_name,
        "status": "running",
        "version": _settings.app_version,
        "environment": _settings.environment,
    }
