# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Section browsing API endpoints.

This module provides:
- GET / - Sections filtered by course, term and instructor, with free seats
"""

import logging

from fastapi import APIRouter, Depends, Query

from registrar.api.dependencies import get_enrollment_coordinator, require_auth
from registrar.api.middleware.auth import CurrentUser
from registrar.domains.enrollment.service import EnrollmentCoordinator
from registrar.models.enrollment import SectionListing

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[SectionListing])
async def list_sections(
    course_id: str | None = Query(None, description="Filter by course, e.g. CS101"),
    semester: str | None = Query(None, description="Filter by semester, e.g. Fall"),
    year: int | None = Query(None, ge=1900, le=2999, description="Filter by year"),
    instructor_id: str | None = Query(None, description="Filter by teaching instructor"),
    current_user: CurrentUser = Depends(require_auth),
    coordinator: EnrollmentCoordinator = Depends(get_enrollment_coordinator),
) -> list[SectionListing]:
    """List sections with meeting time, capacity and enrolled count."""
    return await coordinator.list_sections(
        course_id=course_id,
        semester=semester,
        year=year,
        instructor_id=instructor_id,
    )
