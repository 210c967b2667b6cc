# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Value types exchanged between the enrollment components.

These are plain frozen dataclasses so that the domain logic does not depend
on ORM objects or on the API schemas.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

MINUTES_PER_HOUR = 60


@dataclass(frozen=True)
class StudentRecord:
    """Student as seen by the enrollment workflow."""

    id: str
    name: str
    dept_name: Optional[str] = None
    tot_cred: Decimal = Decimal("0")


@dataclass(frozen=True)
class CourseRecord:
    """Catalog course."""

    id: str
    title: str
    credits: Decimal
    dept_name: Optional[str] = None


@dataclass(frozen=True)
class SectionRecord:
    """Course offering in a term, room and time slot."""

    id: str
    course_id: str
    semester: str
    year: int
    building: str
    room_number: str
    time_slot_id: Optional[str] = None


@dataclass(frozen=True)
class TimeSlot:
    """Weekly meeting time.

    Attributes:
        id: Time slot identifier.
        days: Weekday markers the slot meets on.
        start: Start time in minutes since midnight.
        end: End time in minutes since midnight.
    """

    id: str
    days: frozenset[str]
    start: int
    end: int

    @classmethod
    def from_parts(
        cls,
        id: str,
        days: str,
        start_hr: int,
        start_min: int,
        end_hr: int,
        end_min: int,
    ) -> "TimeSlot":
        """Build a time slot from its stored columns.

        Args:
            id: Time slot identifier.
            days: Comma-separated weekday markers, e.g. ``"1,3,5"``.
            start_hr: Start hour.
            start_min: Start minute.
            end_hr: End hour.
            end_min: End minute.

        Returns:
            The parsed TimeSlot.
        """
        return cls(
            id=id,
            days=parse_days(days),
            start=start_hr * MINUTES_PER_HOUR + start_min,
            end=end_hr * MINUTES_PER_HOUR + end_min,
        )

    def conflicts_with(self, other: "TimeSlot") -> bool:
        """Whether two slots share a weekday and overlap in time.

        Intervals are half-open, so a slot ending at 10:00 does not
        conflict with one starting at 10:00.
        """
        if not self.days & other.days:
            return False
        return self.start < other.end and self.end > other.start

    def format_time(self) -> str:
        """Render the slot as ``HH:MM-HH:MM``."""
        return (
            f"{self.start // MINUTES_PER_HOUR:02d}:{self.start % MINUTES_PER_HOUR:02d}-"
            f"{self.end // MINUTES_PER_HOUR:02d}:{self.end % MINUTES_PER_HOUR:02d}"
        )


def parse_days(days: str) -> frozenset[str]:
    """Parse a comma-separated weekday string into a set of markers."""
    return frozenset(part.strip() for part in days.split(",") if part.strip())


@dataclass(frozen=True)
class TakesRecord:
    """Enrollment of a student in a section.

    ``grade`` is None while the course is in progress.
    """

    student_id: str
    section_id: str
    course_id: str
    semester: str
    year: int
    grade: Optional[str] = None


@dataclass(frozen=True)
class TranscriptEntry:
    """One course on a transcript."""

    course_id: str
    title: str
    section_id: str
    semester: str
    year: int
    credits: Decimal
    grade: Optional[str] = None


@dataclass(frozen=True)
class TranscriptRecord:
    """A student's full course history with derived totals.

    Attributes:
        student_id: Student the transcript belongs to.
        entries: Courses, most recent term first.
        total_credits: Credits of courses completed with a passing grade.
        gpa: Credit-weighted grade point average over graded courses.
    """

    student_id: str
    entries: tuple[TranscriptEntry, ...]
    total_credits: Decimal
    gpa: float
