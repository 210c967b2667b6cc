# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy models for the records database."""

from registrar.infrastructure.database.models.base import Base
from registrar.infrastructure.database.models.university import (
    Classroom,
    Course,
    Department,
    Instructor,
    Prerequisite,
    Section,
    Student,
    Takes,
    Teaches,
    TimeSlotRow,
)

__all__ = [
    "Base",
    "Classroom",
    "Course",
    "Department",
    "Instructor",
    "Prerequisite",
    "Section",
    "Student",
    "Takes",
    "Teaches",
    "TimeSlotRow",
]
