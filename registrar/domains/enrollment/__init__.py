# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain package.

This package provides the course registration workflow:
- Registration guards (prerequisites, schedule conflicts, capacity)
- The enrollment ledger and its SQL implementation
- Registration, drop, transcript and grading services
"""

from registrar.domains.enrollment.checks import (
    CapacityGuard,
    PrerequisiteChecker,
    ScheduleConflictDetector,
)
from registrar.domains.enrollment.errors import (
    ClassroomNotFoundError,
    CourseNotFoundError,
    DuplicateEnrollmentError,
    EnrollmentError,
    EnrollmentNotFoundError,
    InfrastructureError,
    InvalidGradeError,
    NotFoundError,
    NotTeachingSectionError,
    PrerequisitesNotSatisfiedError,
    ScheduleConflictError,
    SectionFullError,
    SectionNotFoundError,
    StudentNotFoundError,
    TimeSlotNotFoundError,
)
from registrar.domains.enrollment.grading import GradingService
from registrar.domains.enrollment.interfaces import Directory, EnrollmentLedger
from registrar.domains.enrollment.locks import SectionLockRegistry
from registrar.domains.enrollment.repository import SQLDirectory, SQLEnrollmentLedger
from registrar.domains.enrollment.service import EnrollmentCoordinator

__all__ = [
    "CapacityGuard",
    "ClassroomNotFoundError",
    "CourseNotFoundError",
    "Directory",
    "DuplicateEnrollmentError",
    "EnrollmentCoordinator",
    "EnrollmentError",
    "EnrollmentLedger",
    "EnrollmentNotFoundError",
    "GradingService",
    "InfrastructureError",
    "InvalidGradeError",
    "NotFoundError",
    "NotTeachingSectionError",
    "PrerequisiteChecker",
    "PrerequisitesNotSatisfiedError",
    "SQLDirectory",
    "SQLEnrollmentLedger",
    "ScheduleConflictDetector",
    "ScheduleConflictError",
    "SectionFullError",
    "SectionLockRegistry",
    "SectionNotFoundError",
    "StudentNotFoundError",
    "TimeSlotNotFoundError",
]
