# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy implementations of the enrollment interfaces.

Both classes work inside the caller's ``AsyncSession`` and never commit;
the transaction boundary belongs to the request. Database failures are
wrapped into ``InfrastructureError``.
"""

import logging
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from registrar.domains.enrollment.errors import (
    ClassroomNotFoundError,
    CourseNotFoundError,
    DuplicateEnrollmentError,
    EnrollmentNotFoundError,
    InfrastructureError,
    SectionNotFoundError,
    StudentNotFoundError,
    TimeSlotNotFoundError,
)
from registrar.domains.enrollment.grades import FAILING_GRADE, build_transcript, check_grade_shape
from registrar.domains.enrollment.interfaces import Directory, EnrollmentLedger
from registrar.domains.enrollment.types import (
    CourseRecord,
    SectionRecord,
    StudentRecord,
    TakesRecord,
    TimeSlot,
    TranscriptEntry,
    TranscriptRecord,
)
from registrar.infrastructure.database.models import (
    Classroom,
    Course,
    Prerequisite,
    Section,
    Student,
    Takes,
    Teaches,
    TimeSlotRow,
)

logger = logging.getLogger(__name__)


def _to_takes_record(row: Takes) -> TakesRecord:
    return TakesRecord(
        student_id=row.student_id,
        section_id=row.section_id,
        course_id=row.course_id,
        semester=row.semester,
        year=row.year,
        grade=row.grade or None,
    )


def _to_section_record(row: Section) -> SectionRecord:
    return SectionRecord(
        id=row.id,
        course_id=row.course_id,
        semester=row.semester,
        year=row.year,
        building=row.building,
        room_number=row.room_number,
        time_slot_id=row.time_slot_id,
    )


class SQLDirectory(Directory):
    """Directory backed by the records database.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize the directory.

        Args:
            db: Async database session.
        """
        self._db = db

    async def get_student(self, student_id: str) -> StudentRecord:
        try:
            row = await self._db.get(Student, student_id)
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to load student", e) from e
        if row is None:
            raise StudentNotFoundError(student_id)
        return StudentRecord(
            id=row.id,
            name=row.name,
            dept_name=row.dept_name,
            tot_cred=row.tot_cred,
        )

    async def get_course(self, course_id: str) -> CourseRecord:
        try:
            row = await self._db.get(Course, course_id)
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to load course", e) from e
        if row is None:
            raise CourseNotFoundError(course_id)
        return CourseRecord(
            id=row.id,
            title=row.title,
            credits=row.credits,
            dept_name=row.dept_name,
        )

    async def get_section(self, section_id: str) -> SectionRecord:
        try:
            row = await self._db.get(Section, section_id)
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to load section", e) from e
        if row is None:
            raise SectionNotFoundError(section_id)
        return _to_section_record(row)

    async def get_prerequisite_course_ids(self, course_id: str) -> set[str]:
        try:
            result = await self._db.execute(
                select(Prerequisite.prereq_id).where(Prerequisite.course_id == course_id)
            )
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to load prerequisites", e) from e
        return set(result.scalars().all())

    async def get_classroom_capacity(self, building: str, room_number: str) -> int:
        try:
            row = await self._db.get(Classroom, (building, room_number))
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to load classroom", e) from e
        if row is None:
            raise ClassroomNotFoundError(building, room_number)
        return row.capacity

    async def get_time_slot(self, time_slot_id: str) -> TimeSlot:
        try:
            row = await self._db.get(TimeSlotRow, time_slot_id)
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to load time slot", e) from e
        if row is None:
            raise TimeSlotNotFoundError(time_slot_id)
        return TimeSlot.from_parts(
            id=row.id,
            days=row.days,
            start_hr=row.start_hr,
            start_min=row.start_min,
            end_hr=row.end_hr,
            end_min=row.end_min,
        )

    async def is_teaching(self, instructor_id: str, section_id: str) -> bool:
        try:
            result = await self._db.execute(
                select(func.count())
                .select_from(Teaches)
                .where(
                    Teaches.instructor_id == instructor_id,
                    Teaches.section_id == section_id,
                )
            )
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to check teaching assignment", e) from e
        return result.scalar_one() > 0

    async def list_sections(
        self,
        course_id: Optional[str] = None,
        semester: Optional[str] = None,
        year: Optional[int] = None,
        instructor_id: Optional[str] = None,
    ) -> list[SectionRecord]:
        query = select(Section)
        if course_id is not None:
            query = query.where(Section.course_id == course_id)
        if semester is not None:
            query = query.where(Section.semester == semester)
        if year is not None:
            query = query.where(Section.year == year)
        if instructor_id is not None:
            query = query.join(Teaches, Teaches.section_id == Section.id).where(
                Teaches.instructor_id == instructor_id
            )

        try:
            result = await self._db.execute(query.order_by(Section.id))
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to list sections", e) from e
        return [_to_section_record(row) for row in result.scalars().all()]


class SQLEnrollmentLedger(EnrollmentLedger):
    """Enrollment ledger stored in the ``takes`` table.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize the ledger.

        Args:
            db: Async database session.
        """
        self._db = db

    # =========================================================================
    # Writes
    # =========================================================================

    async def create(
        self,
        student_id: str,
        course_id: str,
        section_id: str,
        semester: str,
        year: int,
    ) -> TakesRecord:
        row = Takes(
            student_id=student_id,
            section_id=section_id,
            course_id=course_id,
            semester=semester,
            year=year,
            grade=None,
        )
        self._db.add(row)
        try:
            await self._db.flush()
        except IntegrityError as e:
            await self._db.rollback()
            logger.info(
                "Rejected duplicate takes row: student=%s, section=%s",
                student_id,
                section_id,
            )
            raise DuplicateEnrollmentError(student_id, section_id) from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise InfrastructureError("Failed to create enrollment", e) from e
        return _to_takes_record(row)

    async def delete(self, student_id: str, section_id: str) -> None:
        try:
            result = await self._db.execute(
                delete(Takes).where(
                    Takes.student_id == student_id,
                    Takes.section_id == section_id,
                )
            )
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to delete enrollment", e) from e
        if result.rowcount == 0:
            raise EnrollmentNotFoundError(student_id, section_id)

    async def update_grade(self, student_id: str, section_id: str, grade: str) -> TakesRecord:
        check_grade_shape(grade)
        try:
            row = await self._db.get(Takes, (student_id, section_id))
            if row is None:
                raise EnrollmentNotFoundError(student_id, section_id)
            row.grade = grade
            await self._db.flush()
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to update grade", e) from e
        return _to_takes_record(row)

    async def lock_section(self, section_id: str) -> None:
        # FOR UPDATE renders as nothing on SQLite
        try:
            await self._db.execute(
                select(Section.id).where(Section.id == section_id).with_for_update()
            )
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to lock section", e) from e

    # =========================================================================
    # Reads
    # =========================================================================

    async def get_transcript(self, student_id: str) -> TranscriptRecord:
        try:
            result = await self._db.execute(
                select(Takes, Course.title, Course.credits)
                .join(Course, Course.id == Takes.course_id)
                .where(Takes.student_id == student_id)
            )
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to load transcript", e) from e

        entries = [
            TranscriptEntry(
                course_id=takes.course_id,
                title=title,
                section_id=takes.section_id,
                semester=takes.semester,
                year=takes.year,
                credits=credits,
                grade=takes.grade or None,
            )
            for takes, title, credits in result.all()
        ]
        return build_transcript(student_id, entries)

    async def get_active_sections(self, student_id: str) -> set[str]:
        try:
            result = await self._db.execute(
                select(Takes.section_id).where(Takes.student_id == student_id)
            )
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to load active sections", e) from e
        return set(result.scalars().all())

    async def find(self, student_id: str, section_id: str) -> Optional[TakesRecord]:
        try:
            row = await self._db.get(Takes, (student_id, section_id))
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to load enrollment", e) from e
        return _to_takes_record(row) if row is not None else None

    async def count_section_enrollment(self, section_id: str) -> int:
        try:
            result = await self._db.execute(
                select(func.count()).select_from(Takes).where(Takes.section_id == section_id)
            )
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to count section enrollment", e) from e
        return result.scalar_one()

    async def has_passed_course(self, student_id: str, course_id: str) -> bool:
        try:
            result = await self._db.execute(
                select(func.count())
                .select_from(Takes)
                .where(
                    Takes.student_id == student_id,
                    Takes.course_id == course_id,
                    Takes.grade.is_not(None),
                    Takes.grade != "",
                    Takes.grade != FAILING_GRADE,
                )
            )
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to check course completion", e) from e
        return result.scalar_one() > 0

    async def list_for_student(self, student_id: str) -> list[TakesRecord]:
        try:
            result = await self._db.execute(
                select(Takes)
                .where(Takes.student_id == student_id)
                .order_by(Takes.year.desc(), Takes.section_id)
            )
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to load student enrollments", e) from e
        return [_to_takes_record(row) for row in result.scalars().all()]

    async def list_for_section(self, section_id: str) -> list[TakesRecord]:
        try:
            result = await self._db.execute(
                select(Takes)
                .where(Takes.section_id == section_id)
                .order_by(Takes.student_id)
            )
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to load section roster", e) from e
        return [_to_takes_record(row) for row in result.scalars().all()]
