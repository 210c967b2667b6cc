# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication request and response models."""

from typing import Literal

from pydantic import BaseModel, Field

Role = Literal["student", "instructor", "admin"]


class LoginRequest(BaseModel):
    """Login with an ID (or admin username), password and role."""

    user_id: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)
    role: Role


class TokenResponse(BaseModel):
    """Issued access token."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user_id: str
    role: Role
    name: str
