# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- In-memory Directory and EnrollmentLedger implementations
- A small university catalog to register against
- Wired coordinator and grading services
"""

import asyncio
from decimal import Decimal
from typing import Optional
from unittest.mock import AsyncMock

import pytest

from registrar.domains.enrollment.checks import (
    CapacityGuard,
    PrerequisiteChecker,
    ScheduleConflictDetector,
)
from registrar.domains.enrollment.errors import (
    ClassroomNotFoundError,
    CourseNotFoundError,
    DuplicateEnrollmentError,
    EnrollmentNotFoundError,
    SectionNotFoundError,
    StudentNotFoundError,
    TimeSlotNotFoundError,
)
from registrar.domains.enrollment.grades import build_transcript, check_grade_shape, is_passing_grade
from registrar.domains.enrollment.grading import GradingService
from registrar.domains.enrollment.interfaces import Directory, EnrollmentLedger
from registrar.domains.enrollment.locks import SectionLockRegistry
from registrar.domains.enrollment.service import EnrollmentCoordinator
from registrar.domains.enrollment.types import (
    CourseRecord,
    SectionRecord,
    StudentRecord,
    TakesRecord,
    TimeSlot,
    TranscriptEntry,
    TranscriptRecord,
)


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (SQLite or HTTP stack)"
    )


# =============================================================================
# In-memory implementations
# =============================================================================


class InMemoryDirectory(Directory):
    """Directory over plain dictionaries."""

    def __init__(self) -> None:
        self.students: dict[str, StudentRecord] = {}
        self.courses: dict[str, CourseRecord] = {}
        self.sections: dict[str, SectionRecord] = {}
        self.prerequisites: dict[str, set[str]] = {}
        self.classrooms: dict[tuple[str, str], int] = {}
        self.time_slots: dict[str, TimeSlot] = {}
        self.teaching: set[tuple[str, str]] = set()

    async def get_student(self, student_id: str) -> StudentRecord:
        if student_id not in self.students:
            raise StudentNotFoundError(student_id)
        return self.students[student_id]

    async def get_course(self, course_id: str) -> CourseRecord:
        if course_id not in self.courses:
            raise CourseNotFoundError(course_id)
        return self.courses[course_id]

    async def get_section(self, section_id: str) -> SectionRecord:
        if section_id not in self.sections:
            raise SectionNotFoundError(section_id)
        return self.sections[section_id]

    async def get_prerequisite_course_ids(self, course_id: str) -> set[str]:
        return set(self.prerequisites.get(course_id, set()))

    async def get_classroom_capacity(self, building: str, room_number: str) -> int:
        if (building, room_number) not in self.classrooms:
            raise ClassroomNotFoundError(building, room_number)
        return self.classrooms[(building, room_number)]

    async def get_time_slot(self, time_slot_id: str) -> TimeSlot:
        if time_slot_id not in self.time_slots:
            raise TimeSlotNotFoundError(time_slot_id)
        return self.time_slots[time_slot_id]

    async def is_teaching(self, instructor_id: str, section_id: str) -> bool:
        return (instructor_id, section_id) in self.teaching

    async def list_sections(
        self,
        course_id: Optional[str] = None,
        semester: Optional[str] = None,
        year: Optional[int] = None,
        instructor_id: Optional[str] = None,
    ) -> list[SectionRecord]:
        return [
            section
            for section_id, section in sorted(self.sections.items())
            if (course_id is None or section.course_id == course_id)
            and (semester is None or section.semester == semester)
            and (year is None or section.year == year)
            and (instructor_id is None or (instructor_id, section_id) in self.teaching)
        ]


class InMemoryLedger(EnrollmentLedger):
    """Ledger over a dictionary keyed by (student, section).

    Reads and writes yield to the event loop so that concurrent
    registrations interleave the way they would against a database.
    """

    def __init__(self, directory: InMemoryDirectory) -> None:
        self._directory = directory
        self.rows: dict[tuple[str, str], TakesRecord] = {}
        self.create_calls = 0

    async def create(
        self,
        student_id: str,
        course_id: str,
        section_id: str,
        semester: str,
        year: int,
    ) -> TakesRecord:
        await asyncio.sleep(0)
        self.create_calls += 1
        key = (student_id, section_id)
        if key in self.rows:
            raise DuplicateEnrollmentError(student_id, section_id)
        record = TakesRecord(student_id, section_id, course_id, semester, year, None)
        self.rows[key] = record
        return record

    async def delete(self, student_id: str, section_id: str) -> None:
        if self.rows.pop((student_id, section_id), None) is None:
            raise EnrollmentNotFoundError(student_id, section_id)

    async def update_grade(self, student_id: str, section_id: str, grade: str) -> TakesRecord:
        check_grade_shape(grade)
        key = (student_id, section_id)
        if key not in self.rows:
            raise EnrollmentNotFoundError(student_id, section_id)
        old = self.rows[key]
        record = TakesRecord(
            old.student_id, old.section_id, old.course_id, old.semester, old.year, grade
        )
        self.rows[key] = record
        return record

    async def get_transcript(self, student_id: str) -> TranscriptRecord:
        entries = []
        for row in self.rows.values():
            if row.student_id != student_id:
                continue
            course = self._directory.courses[row.course_id]
            entries.append(
                TranscriptEntry(
                    course_id=row.course_id,
                    title=course.title,
                    section_id=row.section_id,
                    semester=row.semester,
                    year=row.year,
                    credits=course.credits,
                    grade=row.grade,
                )
            )
        return build_transcript(student_id, entries)

    async def get_active_sections(self, student_id: str) -> set[str]:
        return {sec for (stu, sec) in self.rows if stu == student_id}

    async def find(self, student_id: str, section_id: str) -> Optional[TakesRecord]:
        await asyncio.sleep(0)
        return self.rows.get((student_id, section_id))

    async def count_section_enrollment(self, section_id: str) -> int:
        await asyncio.sleep(0)
        return sum(1 for (_, sec) in self.rows if sec == section_id)

    async def has_passed_course(self, student_id: str, course_id: str) -> bool:
        return any(
            row.student_id == student_id
            and row.course_id == course_id
            and is_passing_grade(row.grade)
            for row in self.rows.values()
        )

    async def list_for_student(self, student_id: str) -> list[TakesRecord]:
        return [row for row in self.rows.values() if row.student_id == student_id]

    async def list_for_section(self, section_id: str) -> list[TakesRecord]:
        return sorted(
            (row for row in self.rows.values() if row.section_id == section_id),
            key=lambda row: row.student_id,
        )


# =============================================================================
# Catalog Fixtures
# =============================================================================


@pytest.fixture
def directory() -> InMemoryDirectory:
    """Provide a small catalog.

    Courses CS101 (3 credits), CS201 (4 credits, requires CS101) and
    MA101 (3 credits). Slots MW-AM (Mon/Wed 09:00-10:00), MW-LATE
    (Mon/Wed 10:00-11:00), M-OVERLAP (Mon 09:30-10:30) and TT-AM
    (Tue/Thu 09:00-10:00). Room Watson 100 seats 30, Annex 1 seats 2.
    MA101-4 is a Spring 2025 section in the same slot as Fall 2024 CS101-1.
    I100 teaches CS101-1; I200 teaches MA101-2 and MA101-4.
    """
    d = InMemoryDirectory()
    d.students = {
        "S001": StudentRecord("S001", "Ada Lovelace", "Comp. Sci."),
        "S002": StudentRecord("S002", "Grace Hopper", "Comp. Sci."),
        "S003": StudentRecord("S003", "Alan Turing", "Math"),
        "S004": StudentRecord("S004", "Edsger Dijkstra", "Comp. Sci."),
    }
    d.courses = {
        "CS101": CourseRecord("CS101", "Intro to Programming", Decimal("3")),
        "CS201": CourseRecord("CS201", "Data Structures", Decimal("4")),
        "MA101": CourseRecord("MA101", "Calculus I", Decimal("3")),
    }
    d.prerequisites = {"CS201": {"CS101"}}
    d.classrooms = {("Watson", "100"): 30, ("Annex", "1"): 2}
    d.time_slots = {
        "MW-AM": TimeSlot.from_parts("MW-AM", "1,3", 9, 0, 10, 0),
        "MW-LATE": TimeSlot.from_parts("MW-LATE", "1,3", 10, 0, 11, 0),
        "M-OVERLAP": TimeSlot.from_parts("M-OVERLAP", "1", 9, 30, 10, 30),
        "TT-AM": TimeSlot.from_parts("TT-AM", "2,4", 9, 0, 10, 0),
    }
    d.sections = {
        "CS101-1": SectionRecord("CS101-1", "CS101", "Fall", 2024, "Watson", "100", "MW-AM"),
        "CS201-1": SectionRecord("CS201-1", "CS201", "Spring", 2025, "Watson", "100", "MW-LATE"),
        "MA101-1": SectionRecord("MA101-1", "MA101", "Fall", 2024, "Watson", "100", "M-OVERLAP"),
        "MA101-2": SectionRecord("MA101-2", "MA101", "Fall", 2024, "Annex", "1", "TT-AM"),
        "MA101-3": SectionRecord("MA101-3", "MA101", "Fall", 2024, "Watson", "100", "MW-LATE"),
        "MA101-4": SectionRecord("MA101-4", "MA101", "Spring", 2025, "Watson", "100", "MW-AM"),
    }
    d.teaching = {("I100", "CS101-1"), ("I200", "MA101-2"), ("I200", "MA101-4")}
    return d


@pytest.fixture
def ledger(directory: InMemoryDirectory) -> InMemoryLedger:
    """Provide an empty in-memory ledger over the catalog."""
    return InMemoryLedger(directory)


@pytest.fixture
def section_locks() -> SectionLockRegistry:
    """Provide a fresh section lock registry."""
    return SectionLockRegistry()


@pytest.fixture
def commit() -> AsyncMock:
    """Provide a commit hook that records its calls."""
    return AsyncMock()


@pytest.fixture
def coordinator(
    directory: InMemoryDirectory,
    ledger: InMemoryLedger,
    section_locks: SectionLockRegistry,
    commit: AsyncMock,
) -> EnrollmentCoordinator:
    """Provide a coordinator over the in-memory catalog and ledger."""
    return EnrollmentCoordinator(
        directory=directory,
        ledger=ledger,
        prerequisites=PrerequisiteChecker(directory, ledger),
        schedule=ScheduleConflictDetector(directory, ledger),
        capacity=CapacityGuard(directory, ledger),
        locks=section_locks,
        commit=commit,
    )


@pytest.fixture
def grading(
    directory: InMemoryDirectory,
    ledger: InMemoryLedger,
    commit: AsyncMock,
) -> GradingService:
    """Provide a grading service over the in-memory catalog and ledger."""
    return GradingService(directory=directory, ledger=ledger, commit=commit)
