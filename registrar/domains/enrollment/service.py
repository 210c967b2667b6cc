# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment coordinator for course registration.

This module provides the EnrollmentCoordinator class for:
- Registering a student for a section
- Dropping a section
- Reading a student's transcript and current courses
- Browsing sections with their free seats

Registration runs its guards in a fixed order and stops at the first
failure: student exists, section exists, not already registered,
prerequisites passed, no schedule conflict, seat available. Only then is
the enrollment written.
"""

import logging
from typing import Optional

from registrar.domains.enrollment.catalog import describe_sections, meeting_time
from registrar.domains.enrollment.checks import (
    CapacityGuard,
    PrerequisiteChecker,
    ScheduleConflictDetector,
)
from registrar.domains.enrollment.errors import (
    DuplicateEnrollmentError,
    EnrollmentNotFoundError,
    PrerequisitesNotSatisfiedError,
    ScheduleConflictError,
    SectionFullError,
)
from registrar.domains.enrollment.interfaces import (
    CommitHook,
    Directory,
    EnrollmentLedger,
    no_commit,
)
from registrar.domains.enrollment.grades import grade_point
from registrar.domains.enrollment.locks import SectionLockRegistry
from registrar.domains.enrollment.types import (
    StudentRecord,
    TakesRecord,
    TranscriptEntry,
    TranscriptRecord,
)
from registrar.models.enrollment import (
    CourseGrade,
    CurrentCourse,
    SectionListing,
    StudentSummary,
    Transcript,
)

logger = logging.getLogger(__name__)


class EnrollmentCoordinator:
    """Runs the registration workflow over the enrollment capabilities.

    Attributes:
        _directory: Read access to university records.
        _ledger: Enrollment system of record.
        _prerequisites: Prerequisite guard.
        _schedule: Schedule conflict guard.
        _capacity: Capacity guard.
        _locks: Process-wide per-section locks.
        _commit: Commits the current unit of work.

    Example:
        coordinator = EnrollmentCoordinator(
            directory, ledger, prerequisites, schedule, capacity, locks, session.commit
        )
        await coordinator.register("S001", "CS101-1-Fall-2024")
    """

    def __init__(
        self,
        directory: Directory,
        ledger: EnrollmentLedger,
        prerequisites: PrerequisiteChecker,
        schedule: ScheduleConflictDetector,
        capacity: CapacityGuard,
        locks: SectionLockRegistry,
        commit: Optional[CommitHook] = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            directory: Read access to university records.
            ledger: Enrollment system of record.
            prerequisites: Prerequisite guard.
            schedule: Schedule conflict guard.
            capacity: Capacity guard.
            locks: Per-section lock registry shared across the process.
            commit: Called after a write, while the section lock is still
                held. Defaults to a no-op.
        """
        self._directory = directory
        self._ledger = ledger
        self._prerequisites = prerequisites
        self._schedule = schedule
        self._capacity = capacity
        self._locks = locks
        self._commit = commit or no_commit

    async def register(self, student_id: str, section_id: str) -> TakesRecord:
        """Register a student for a section.

        Args:
            student_id: Student registering.
            section_id: Section to register for.

        Returns:
            The new, ungraded enrollment.

        Raises:
            StudentNotFoundError: If the student does not exist.
            SectionNotFoundError: If the section does not exist.
            DuplicateEnrollmentError: If already registered for the section.
            PrerequisitesNotSatisfiedError: If a prerequisite is not passed.
            ScheduleConflictError: If the section overlaps the current schedule.
            SectionFullError: If the section is at capacity.
            InfrastructureError: If storage fails.
        """
        await self._directory.get_student(student_id)
        section = await self._directory.get_section(section_id)

        # Checks and insert for one section run one at a time and the
        # lock is released only after the commit.
        async with self._locks.hold(section_id):
            await self._ledger.lock_section(section_id)

            if await self._ledger.find(student_id, section_id) is not None:
                raise DuplicateEnrollmentError(student_id, section_id)

            if not await self._prerequisites.is_satisfied(student_id, section.course_id):
                raise PrerequisitesNotSatisfiedError(student_id, section.course_id)

            if await self._schedule.has_conflict(student_id, section_id):
                raise ScheduleConflictError(student_id, section_id)

            if not await self._capacity.has_room(section_id):
                raise SectionFullError(section_id)

            record = await self._ledger.create(
                student_id=student_id,
                course_id=section.course_id,
                section_id=section_id,
                semester=section.semester,
                year=section.year,
            )
            await self._commit()

        logger.info(
            "Registered student: student=%s, section=%s, course=%s",
            student_id,
            section_id,
            section.course_id,
        )
        return record

    async def drop(self, student_id: str, section_id: str) -> None:
        """Drop a section, deleting the enrollment.

        Args:
            student_id: Student dropping.
            section_id: Section to drop.

        Raises:
            EnrollmentNotFoundError: If the student is not registered.
            InfrastructureError: If storage fails.
        """
        if await self._ledger.find(student_id, section_id) is None:
            raise EnrollmentNotFoundError(student_id, section_id)

        await self._ledger.delete(student_id, section_id)
        await self._commit()

        logger.info("Dropped section: student=%s, section=%s", student_id, section_id)

    async def get_transcript(self, student_id: str) -> Transcript:
        """Get a student's transcript.

        Raises:
            StudentNotFoundError: If the student does not exist.
        """
        student = await self._directory.get_student(student_id)
        record = await self._ledger.get_transcript(student_id)
        return _to_transcript(student, record)

    async def get_current_courses(
        self,
        student_id: str,
        semester: Optional[str] = None,
        year: Optional[int] = None,
    ) -> list[CurrentCourse]:
        """Get the sections a student is registered for.

        Args:
            student_id: Student to list.
            semester: Only include this semester.
            year: Only include this year.

        Returns:
            Registered sections with course, room and meeting time.

        Raises:
            StudentNotFoundError: If the student does not exist.
        """
        await self._directory.get_student(student_id)
        enrollments = await self._ledger.list_for_student(student_id)

        courses = []
        for takes in enrollments:
            if semester is not None and takes.semester != semester:
                continue
            if year is not None and takes.year != year:
                continue

            section = await self._directory.get_section(takes.section_id)
            course = await self._directory.get_course(takes.course_id)
            days, time = await meeting_time(self._directory, section)

            courses.append(
                CurrentCourse(
                    course_id=course.id,
                    title=course.title,
                    credits=float(course.credits),
                    section_id=section.id,
                    semester=takes.semester,
                    year=takes.year,
                    building=section.building,
                    room_number=section.room_number,
                    days=days,
                    time=time,
                    grade=takes.grade,
                )
            )
        return courses

    async def list_sections(
        self,
        course_id: Optional[str] = None,
        semester: Optional[str] = None,
        year: Optional[int] = None,
        instructor_id: Optional[str] = None,
    ) -> list[SectionListing]:
        """Browse sections open for registration.

        Args:
            course_id: Only sections of this course.
            semester: Only sections in this semester.
            year: Only sections in this year.
            instructor_id: Only sections this instructor teaches.

        Returns:
            Matching sections with meeting time, capacity and enrolled count.
        """
        sections = await self._directory.list_sections(
            course_id=course_id,
            semester=semester,
            year=year,
            instructor_id=instructor_id,
        )
        return await describe_sections(self._directory, self._ledger, sections)


def _to_course_grade(entry: TranscriptEntry) -> CourseGrade:
    return CourseGrade(
        course_id=entry.course_id,
        title=entry.title,
        section_id=entry.section_id,
        semester=entry.semester,
        year=entry.year,
        credits=float(entry.credits),
        grade=entry.grade,
        grade_point=grade_point(entry.grade) if entry.grade else None,
    )


def _to_transcript(student: StudentRecord, record: TranscriptRecord) -> Transcript:
    """Assemble a transcript response from the student and ledger data."""
    return Transcript(
        student=StudentSummary(id=student.id, name=student.name, dept_name=student.dept_name),
        courses=[_to_course_grade(entry) for entry in record.entries],
        total_credits=float(record.total_credits),
        gpa=record.gpa,
    )
