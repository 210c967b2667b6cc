# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get database sessions
- Get authenticated users by role
- Get service instances wired to the request's session

Example:
    @router.get("/students/me/transcript")
    async def get_my_transcript(
        current_user: CurrentUser = Depends(require_student),
        coordinator: EnrollmentCoordinator = Depends(get_enrollment_coordinator),
    ):
        ...
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from registrar.api.middleware.auth import CurrentUser, get_current_user
from registrar.core.config import Settings
from registrar.domains.auth.jwt import JWTManager
from registrar.domains.auth.password import PasswordHasher
from registrar.domains.auth.service import AuthService
from registrar.domains.enrollment.checks import (
    CapacityGuard,
    PrerequisiteChecker,
    ScheduleConflictDetector,
)
from registrar.domains.enrollment.errors import InfrastructureError
from registrar.domains.enrollment.grading import GradingService
from registrar.domains.enrollment.interfaces import CommitHook
from registrar.domains.enrollment.locks import SectionLockRegistry
from registrar.domains.enrollment.repository import SQLDirectory, SQLEnrollmentLedger
from registrar.domains.enrollment.service import EnrollmentCoordinator
from registrar.infrastructure.database.connection import get_session

logger = logging.getLogger(__name__)

# Shared by every request in the process
_section_locks = SectionLockRegistry()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get records database session.

    The session is committed when the request succeeds and rolled back
    when it raises.

    Yields:
        AsyncSession for the records database.
    """
    async with get_session() as session:
        yield session


# =========================================================================
# Authentication Dependencies
# =========================================================================


def require_auth(request: Request) -> CurrentUser:
    """Require authenticated user.

    Args:
        request: HTTP request.

    Returns:
        CurrentUser.

    Raises:
        HTTPException: If not authenticated.
    """
    user = get_current_user(request)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_student(request: Request) -> CurrentUser:
    """Require student user.

    Raises:
        HTTPException: If not authenticated or not a student.
    """
    user = require_auth(request)
    if not user.is_student:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Student access required",
        )
    return user


def require_instructor(request: Request) -> CurrentUser:
    """Require instructor user.

    Raises:
        HTTPException: If not authenticated or not an instructor.
    """
    user = require_auth(request)
    if not user.is_instructor:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Instructor access required",
        )
    return user


def require_instructor_or_admin(request: Request) -> CurrentUser:
    """Require instructor or admin user.

    Raises:
        HTTPException: If not instructor or admin.
    """
    user = require_auth(request)
    if not (user.is_instructor or user.is_admin):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Instructor or admin access required",
        )
    return user


def require_admin(request: Request) -> CurrentUser:
    """Require admin user.

    Raises:
        HTTPException: If not authenticated or not admin.
    """
    user = require_auth(request)
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


# =========================================================================
# Service Dependencies
# =========================================================================


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_jwt_manager(settings: Settings = Depends(get_app_settings)) -> JWTManager:
    """Get JWT manager instance."""
    return JWTManager(settings.jwt)


def get_password_hasher() -> PasswordHasher:
    """Get password hasher instance."""
    return PasswordHasher()


def get_section_locks() -> SectionLockRegistry:
    """Get the process-wide section lock registry."""
    return _section_locks


def _commit_hook(db: AsyncSession) -> CommitHook:
    async def commit() -> None:
        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise InfrastructureError("Failed to commit transaction", e) from e

    return commit


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
    hasher: PasswordHasher = Depends(get_password_hasher),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    """Get AuthService instance.

    Args:
        db: Records database session.
        jwt_manager: JWT manager.
        hasher: Password hasher.
        settings: Application settings.

    Returns:
        AuthService.
    """
    return AuthService(db, jwt_manager, settings.admin, hasher)


async def get_enrollment_coordinator(
    db: AsyncSession = Depends(get_db),
    locks: SectionLockRegistry = Depends(get_section_locks),
) -> EnrollmentCoordinator:
    """Get EnrollmentCoordinator wired to the request's session.

    Args:
        db: Records database session.
        locks: Process-wide section locks.

    Returns:
        EnrollmentCoordinator.
    """
    directory = SQLDirectory(db)
    ledger = SQLEnrollmentLedger(db)
    return EnrollmentCoordinator(
        directory=directory,
        ledger=ledger,
        prerequisites=PrerequisiteChecker(directory, ledger),
        schedule=ScheduleConflictDetector(directory, ledger),
        capacity=CapacityGuard(directory, ledger),
        locks=locks,
        commit=_commit_hook(db),
    )


async def get_grading_service(
    db: AsyncSession = Depends(get_db),
) -> GradingService:
    """Get GradingService wired to the request's session."""
    return GradingService(
        directory=SQLDirectory(db),
        ledger=SQLEnrollmentLedger(db),
        commit=_commit_hook(db),
    )
