# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Instructor-facing grading.

Grades are written straight to the ledger; registration guards do not
apply. Instructors may only grade and view sections they teach;
administrators may act on any section.
"""

import logging
from typing import Optional

from registrar.domains.enrollment.catalog import describe_sections
from registrar.domains.enrollment.errors import (
    EnrollmentNotFoundError,
    InvalidGradeError,
    NotTeachingSectionError,
)
from registrar.domains.enrollment.grades import is_valid_grade
from registrar.domains.enrollment.interfaces import (
    CommitHook,
    Directory,
    EnrollmentLedger,
    no_commit,
)
from registrar.domains.enrollment.types import TakesRecord
from registrar.models.enrollment import SectionListing, SectionStudent

logger = logging.getLogger(__name__)


class GradingService:
    """Records grades, lists taught sections and their rosters.

    Attributes:
        _directory: Read access to university records.
        _ledger: Enrollment system of record.
        _commit: Commits the current unit of work.
    """

    def __init__(
        self,
        directory: Directory,
        ledger: EnrollmentLedger,
        commit: Optional[CommitHook] = None,
    ) -> None:
        self._directory = directory
        self._ledger = ledger
        self._commit = commit or no_commit

    async def _check_teaching(self, actor_id: str, section_id: str, is_admin: bool) -> None:
        if is_admin:
            return
        if not await self._directory.is_teaching(actor_id, section_id):
            raise NotTeachingSectionError(actor_id, section_id)

    async def assign_grade(
        self,
        actor_id: str,
        student_id: str,
        section_id: str,
        grade: str,
        is_admin: bool = False,
    ) -> TakesRecord:
        """Record a student's grade in a section.

        Args:
            actor_id: Instructor (or administrator) recording the grade.
            student_id: Graded student.
            section_id: Section being graded.
            grade: Letter grade.
            is_admin: Skip the teaching assignment check.

        Returns:
            The updated enrollment.

        Raises:
            NotTeachingSectionError: If the instructor does not teach the section.
            InvalidGradeError: If the grade is not on the grade scale.
            EnrollmentNotFoundError: If the student is not registered.
        """
        await self._check_teaching(actor_id, section_id, is_admin)

        if not is_valid_grade(grade):
            raise InvalidGradeError(grade)

        if await self._ledger.find(student_id, section_id) is None:
            raise EnrollmentNotFoundError(student_id, section_id)

        record = await self._ledger.update_grade(student_id, section_id, grade)
        await self._commit()

        logger.info(
            "Grade recorded: student=%s, section=%s, grade=%s, by=%s",
            student_id,
            section_id,
            grade,
            actor_id,
        )
        return record

    async def list_teaching_sections(self, actor_id: str) -> list[SectionListing]:
        """List the sections an instructor teaches with their seat counts."""
        sections = await self._directory.list_sections(instructor_id=actor_id)
        return await describe_sections(self._directory, self._ledger, sections)

    async def list_section_students(
        self,
        actor_id: str,
        section_id: str,
        is_admin: bool = False,
    ) -> list[SectionStudent]:
        """List the students registered in a section with their grades.

        Raises:
            NotTeachingSectionError: If the instructor does not teach the section.
            SectionNotFoundError: If the section does not exist.
        """
        await self._check_teaching(actor_id, section_id, is_admin)
        await self._directory.get_section(section_id)

        roster = []
        for takes in await self._ledger.list_for_section(section_id):
            student = await self._directory.get_student(takes.student_id)
            roster.append(
                SectionStudent(
                    student_id=student.id,
                    name=student.name,
                    dept_name=student.dept_name,
                    grade=takes.grade,
                )
            )
        return roster
