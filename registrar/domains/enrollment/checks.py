# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Registration guards.

Each guard answers one yes/no question for the coordinator. Storage
failures propagate as ``InfrastructureError`` and are never reported as a
negative answer.
"""

import logging

from registrar.domains.enrollment.interfaces import Directory, EnrollmentLedger

logger = logging.getLogger(__name__)


class PrerequisiteChecker:
    """Checks that a student has passed every prerequisite of a course."""

    def __init__(self, directory: Directory, ledger: EnrollmentLedger) -> None:
        self._directory = directory
        self._ledger = ledger

    async def is_satisfied(self, student_id: str, course_id: str) -> bool:
        """Whether every prerequisite of the course has a passing grade.

        A course without prerequisites is always satisfied. A prerequisite
        that is in progress or failed does not count.

        Args:
            student_id: Student registering.
            course_id: Course being registered for.

        Returns:
            True if all prerequisites are passed.
        """
        prereq_ids = await self._directory.get_prerequisite_course_ids(course_id)
        for prereq_id in sorted(prereq_ids):
            if not await self._ledger.has_passed_course(student_id, prereq_id):
                logger.debug(
                    "Student %s missing prerequisite %s for course %s",
                    student_id,
                    prereq_id,
                    course_id,
                )
                return False
        return True


class ScheduleConflictDetector:
    """Detects overlap between a candidate section and the student's schedule."""

    def __init__(self, directory: Directory, ledger: EnrollmentLedger) -> None:
        self._directory = directory
        self._ledger = ledger

    async def has_conflict(self, student_id: str, section_id: str) -> bool:
        """Whether the candidate section overlaps any section the student takes.

        Only sections in the candidate's term are compared, and the candidate
        itself is excluded. Sections without a time slot never conflict.

        Args:
            student_id: Student registering.
            section_id: Candidate section.

        Returns:
            True if some pair of slots shares a weekday and overlaps.
        """
        candidate = await self._directory.get_section(section_id)
        if candidate.time_slot_id is None:
            return False
        candidate_slot = await self._directory.get_time_slot(candidate.time_slot_id)

        active = set(await self._ledger.get_active_sections(student_id))
        active.discard(section_id)

        for other_id in sorted(active):
            other = await self._directory.get_section(other_id)
            if (other.semester, other.year) != (candidate.semester, candidate.year):
                continue
            if other.time_slot_id is None:
                continue
            other_slot = await self._directory.get_time_slot(other.time_slot_id)
            if candidate_slot.conflicts_with(other_slot):
                logger.debug(
                    "Section %s conflicts with section %s for student %s",
                    section_id,
                    other_id,
                    student_id,
                )
                return True
        return False


class CapacityGuard:
    """Checks that a section still has a free seat."""

    def __init__(self, directory: Directory, ledger: EnrollmentLedger) -> None:
        self._directory = directory
        self._ledger = ledger

    async def has_room(self, section_id: str) -> bool:
        """Whether current enrollment is strictly below classroom capacity."""
        section = await self._directory.get_section(section_id)
        capacity = await self._directory.get_classroom_capacity(
            section.building, section.room_number
        )
        enrolled = await self._ledger.count_section_enrollment(section_id)
        return enrolled < capacity
