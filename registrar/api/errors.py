# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exception handlers mapping domain errors to HTTP responses.

Every response has the shape ``{"error": code, "detail": message}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from registrar.domains.auth.service import AuthenticationError
from registrar.domains.enrollment.errors import EnrollmentError
from registrar.infrastructure.database.connection import DatabaseError

logger = logging.getLogger(__name__)


async def enrollment_error_handler(request: Request, exc: EnrollmentError) -> JSONResponse:
    """Render an enrollment error with its own status and code."""
    if exc.status_code >= 500:
        logger.error("Enrollment operation failed on %s: %s", request.url.path, str(exc))
    else:
        logger.info(
            "Enrollment request rejected on %s: %s",
            request.url.path,
            exc.code,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "detail": exc.message},
    )


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    """Render a failed sign-in as 401."""
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"error": "invalid_credentials", "detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    """Render a database failure outside the domain services as 500."""
    logger.error("Database error on %s: %s", request.url.path, str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "database_error", "detail": exc.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain exception handlers to the application."""
    app.add_exception_handler(EnrollmentError, enrollment_error_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
