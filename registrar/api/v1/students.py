# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student record API endpoints.

This module provides:
- GET /me/transcript - Transcript of the signed-in student
- GET /me/courses - Sections the signed-in student is registered for
- GET /{student_id}/transcript - Any student's transcript (admin)
"""

import logging

from fastapi import APIRouter, Depends, Query

from registrar.api.dependencies import (
    get_enrollment_coordinator,
    require_admin,
    require_student,
)
from registrar.api.middleware.auth import CurrentUser
from registrar.domains.enrollment.service import EnrollmentCoordinator
from registrar.models.enrollment import CurrentCourse, Transcript

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me/transcript", response_model=Transcript)
async def get_my_transcript(
    current_user: CurrentUser = Depends(require_student),
    coordinator: EnrollmentCoordinator = Depends(get_enrollment_coordinator),
) -> Transcript:
    """Get the signed-in student's transcript with total credits and GPA."""
    return await coordinator.get_transcript(current_user.id)


@router.get("/me/courses", response_model=list[CurrentCourse])
async def get_my_courses(
    semester: str | None = Query(None, description="Filter by semester, e.g. Fall"),
    year: int | None = Query(None, ge=1900, le=2999, description="Filter by year"),
    current_user: CurrentUser = Depends(require_student),
    coordinator: EnrollmentCoordinator = Depends(get_enrollment_coordinator),
) -> list[CurrentCourse]:
    """Get the sections the signed-in student is registered for."""
    return await coordinator.get_current_courses(current_user.id, semester=semester, year=year)


@router.get("/{student_id}/transcript", response_model=Transcript)
async def get_student_transcript(
    student_id: str,
    current_user: CurrentUser = Depends(require_admin),
    coordinator: EnrollmentCoordinator = Depends(get_enrollment_coordinator),
) -> Transcript:
    """Get any student's transcript."""
    return await coordinator.get_transcript(student_id)
