# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course registration API endpoints.

This module provides endpoints for the signed-in student:
- POST / - Register for a section
- DELETE /{section_id} - Drop a section
- POST /drop - Drop a section (body form)
"""

import logging

from fastapi import APIRouter, Depends, status

from registrar.api.dependencies import get_enrollment_coordinator, require_student
from registrar.api.middleware.auth import CurrentUser
from registrar.domains.enrollment.service import EnrollmentCoordinator
from registrar.models.enrollment import DropRequest, MessageResponse, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register for a section",
)
async def register(
    data: RegisterRequest,
    current_user: CurrentUser = Depends(require_student),
    coordinator: EnrollmentCoordinator = Depends(get_enrollment_coordinator),
) -> MessageResponse:
    """Register the current student for a section.

    Rejections are rendered by the enrollment error handler:
    404 for an unknown student or section, 409 for a duplicate, a schedule
    conflict or a full section, 422 for missing prerequisites.
    """
    await coordinator.register(current_user.id, data.section_id)
    return MessageResponse(message=f"Registered for section {data.section_id}")


async def _drop(
    section_id: str,
    current_user: CurrentUser,
    coordinator: EnrollmentCoordinator,
) -> MessageResponse:
    await coordinator.drop(current_user.id, section_id)
    return MessageResponse(message=f"Dropped section {section_id}")


@router.delete(
    "/{section_id}",
    response_model=MessageResponse,
    summary="Drop a section",
)
async def drop(
    section_id: str,
    current_user: CurrentUser = Depends(require_student),
    coordinator: EnrollmentCoordinator = Depends(get_enrollment_coordinator),
) -> MessageResponse:
    """Drop a section the current student is registered for."""
    return await _drop(section_id, current_user, coordinator)


@router.post(
    "/drop",
    response_model=MessageResponse,
    summary="Drop a section",
)
async def drop_from_body(
    data: DropRequest,
    current_user: CurrentUser = Depends(require_student),
    coordinator: EnrollmentCoordinator = Depends(get_enrollment_coordinator),
) -> MessageResponse:
    """Drop a section, taking the section ID from the request body."""
    return await _drop(data.section_id, current_user, coordinator)
