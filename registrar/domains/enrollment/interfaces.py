# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Capability interfaces consumed by the enrollment workflow.

The coordinator and its checks depend on these abstract classes only.
The SQL implementations live in ``repository``; tests provide in-memory
implementations.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional

from registrar.domains.enrollment.types import (
    CourseRecord,
    SectionRecord,
    StudentRecord,
    TakesRecord,
    TimeSlot,
    TranscriptRecord,
)


CommitHook = Callable[[], Awaitable[None]]


async def no_commit() -> None:
    """Commit hook for callers that manage the transaction themselves."""
    return None


class Directory(ABC):
    """Read-only lookups of university records.

    Every lookup raises the matching ``NotFoundError`` subclass when the
    entity does not exist.
    """

    @abstractmethod
    async def get_student(self, student_id: str) -> StudentRecord:
        """Get a student by ID.

        Raises:
            StudentNotFoundError: If the student does not exist.
        """
        ...

    @abstractmethod
    async def get_course(self, course_id: str) -> CourseRecord:
        """Get a course by ID.

        Raises:
            CourseNotFoundError: If the course does not exist.
        """
        ...

    @abstractmethod
    async def get_section(self, section_id: str) -> SectionRecord:
        """Get a section by ID.

        Raises:
            SectionNotFoundError: If the section does not exist.
        """
        ...

    @abstractmethod
    async def get_prerequisite_course_ids(self, course_id: str) -> set[str]:
        """Get IDs of the courses that must be passed before ``course_id``."""
        ...

    @abstractmethod
    async def get_classroom_capacity(self, building: str, room_number: str) -> int:
        """Get the seat capacity of a classroom.

        Raises:
            ClassroomNotFoundError: If the classroom does not exist.
        """
        ...

    @abstractmethod
    async def get_time_slot(self, time_slot_id: str) -> TimeSlot:
        """Get a time slot by ID.

        Raises:
            TimeSlotNotFoundError: If the time slot does not exist.
        """
        ...

    @abstractmethod
    async def is_teaching(self, instructor_id: str, section_id: str) -> bool:
        """Whether the instructor is assigned to the section."""
        ...

    @abstractmethod
    async def list_sections(
        self,
        course_id: Optional[str] = None,
        semester: Optional[str] = None,
        year: Optional[int] = None,
        instructor_id: Optional[str] = None,
    ) -> list[SectionRecord]:
        """List sections matching every given filter, ordered by section ID.

        Args:
            course_id: Only sections of this course.
            semester: Only sections in this semester.
            year: Only sections in this year.
            instructor_id: Only sections this instructor teaches.
        """
        ...


class EnrollmentLedger(ABC):
    """System of record for enrollments (takes rows).

    An enrollment is active while its row exists, whether or not it has
    been graded. Dropping deletes the row.
    """

    @abstractmethod
    async def create(
        self,
        student_id: str,
        course_id: str,
        section_id: str,
        semester: str,
        year: int,
    ) -> TakesRecord:
        """Insert an ungraded enrollment.

        Raises:
            DuplicateEnrollmentError: If the student already has a row for
                the section.
        """
        ...

    @abstractmethod
    async def delete(self, student_id: str, section_id: str) -> None:
        """Delete an enrollment.

        Raises:
            EnrollmentNotFoundError: If no such enrollment exists.
        """
        ...

    @abstractmethod
    async def update_grade(self, student_id: str, section_id: str, grade: str) -> TakesRecord:
        """Set the grade of an enrollment.

        Only the shape of the value is checked here; membership in the
        grade scale is checked by the grading service.

        Raises:
            InvalidGradeError: If the value is not a short, whitespace-free string.
            EnrollmentNotFoundError: If no such enrollment exists.
        """
        ...

    @abstractmethod
    async def get_transcript(self, student_id: str) -> TranscriptRecord:
        """Get the student's transcript with total credits and GPA."""
        ...

    @abstractmethod
    async def get_active_sections(self, student_id: str) -> set[str]:
        """Get IDs of every section the student has a row for."""
        ...

    @abstractmethod
    async def find(self, student_id: str, section_id: str) -> Optional[TakesRecord]:
        """Get an enrollment, or None if absent."""
        ...

    @abstractmethod
    async def count_section_enrollment(self, section_id: str) -> int:
        """Count the enrollments in a section."""
        ...

    @abstractmethod
    async def has_passed_course(self, student_id: str, course_id: str) -> bool:
        """Whether the student has a passing grade in any section of the course."""
        ...

    @abstractmethod
    async def list_for_student(self, student_id: str) -> list[TakesRecord]:
        """Get every enrollment of a student."""
        ...

    @abstractmethod
    async def list_for_section(self, section_id: str) -> list[TakesRecord]:
        """Get every enrollment in a section, ordered by student ID."""
        ...

    async def lock_section(self, section_id: str) -> None:
        """Hold a lock on the section until the current transaction ends.

        Storage backends without row locks keep this no-op.
        """
        return None
