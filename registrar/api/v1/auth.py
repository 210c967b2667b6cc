# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication API endpoints.

This module provides:
- POST /login - Sign in as a student, instructor or administrator

Example:
    POST /api/v1/auth/login
    {
        "user_id": "S001",
        "password": "secret",
        "role": "student"
    }
"""

import logging

from fastapi import APIRouter, Depends

from registrar.api.dependencies import get_auth_service
from registrar.domains.auth.service import AuthService
from registrar.models.auth import LoginRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Sign in",
    description="Authenticate with an ID and password for the given role and receive an access token.",
)
async def login(
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Sign in and issue an access token.

    Args:
        data: Login credentials and role.
        auth_service: Authentication service.

    Returns:
        TokenResponse with the bearer token.
    """
    return await auth_service.login(data.user_id, data.password, data.role)
