# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API request and response models."""

from registrar.models.auth import LoginRequest, Role, TokenResponse
from registrar.models.enrollment import (
    CourseGrade,
    CurrentCourse,
    DropRequest,
    GradeUpdateRequest,
    MessageResponse,
    RegisterRequest,
    SectionListing,
    SectionStudent,
    StudentSummary,
    Transcript,
)

__all__ = [
    "CourseGrade",
    "CurrentCourse",
    "DropRequest",
    "GradeUpdateRequest",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "Role",
    "SectionListing",
    "SectionStudent",
    "StudentSummary",
    "TokenResponse",
    "Transcript",
]
