# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Instructor grading API endpoints.

This module provides:
- PUT /grades - Record a student's grade
- GET /sections - Sections the signed-in instructor teaches
- GET /sections/{section_id}/students - Section roster with grades

Instructors act on the sections they teach; administrators on any section.
"""

import logging

from fastapi import APIRouter, Depends

from registrar.api.dependencies import (
    get_grading_service,
    require_instructor,
    require_instructor_or_admin,
)
from registrar.api.middleware.auth import CurrentUser
from registrar.domains.enrollment.grading import GradingService
from registrar.models.enrollment import (
    GradeUpdateRequest,
    MessageResponse,
    SectionListing,
    SectionStudent,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.put("/grades", response_model=MessageResponse)
async def update_grade(
    data: GradeUpdateRequest,
    current_user: CurrentUser = Depends(require_instructor_or_admin),
    grading: GradingService = Depends(get_grading_service),
) -> MessageResponse:
    """Record a student's grade in a section."""
    await grading.assign_grade(
        actor_id=current_user.id,
        student_id=data.student_id,
        section_id=data.section_id,
        grade=data.grade,
        is_admin=current_user.is_admin,
    )
    return MessageResponse(
        message=f"Grade {data.grade} recorded for {data.student_id} in {data.section_id}"
    )


@router.get("/sections", response_model=list[SectionListing])
async def list_teaching_sections(
    current_user: CurrentUser = Depends(require_instructor),
    grading: GradingService = Depends(get_grading_service),
) -> list[SectionListing]:
    """List the sections the signed-in instructor teaches."""
    return await grading.list_teaching_sections(current_user.id)


@router.get("/sections/{section_id}/students", response_model=list[SectionStudent])
async def list_section_students(
    section_id: str,
    current_user: CurrentUser = Depends(require_instructor_or_admin),
    grading: GradingService = Depends(get_grading_service),
) -> list[SectionStudent]:
    """List the students registered in a section."""
    return await grading.list_section_students(
        actor_id=current_user.id,
        section_id=section_id,
        is_admin=current_user.is_admin,
    )
