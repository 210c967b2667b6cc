# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.
Each module provides a FastAPI router for a specific domain.

Modules:
    auth: Sign-in.
    registration: Register for and drop sections.
    students: Transcripts and current courses.
    instructors: Grading and section rosters.
    sections: Section browsing.
"""

from fastapi import APIRouter

from registrar.api.v1 import auth, instructors, registration, sections, students

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# Include domain routers
router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(registration.router, prefix="/registration", tags=["Registration"])
router.include_router(sections.router, prefix="/sections", tags=["Sections"])
router.include_router(students.router, prefix="/students", tags=["Students"])
router.include_router(instructors.router, prefix="/instructors", tags=["Instructors"])

__all__ = ["router"]
