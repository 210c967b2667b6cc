# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Letter grades and grade points."""

from decimal import Decimal
from typing import Iterable, Optional

from registrar.domains.enrollment.errors import InvalidGradeError
from registrar.domains.enrollment.types import TranscriptEntry, TranscriptRecord

GRADE_POINTS: dict[str, float] = {
    "A": 4.0,
    "A-": 3.7,
    "B+": 3.3,
    "B": 3.0,
    "B-": 2.7,
    "C+": 2.3,
    "C": 2.0,
    "C-": 1.7,
    "D+": 1.3,
    "D": 1.0,
    "F": 0.0,
}

VALID_GRADES: frozenset[str] = frozenset(GRADE_POINTS)

FAILING_GRADE = "F"

# Chronological order within a year, used to sort transcripts
SEMESTER_ORDER: dict[str, int] = {
    "Winter": 0,
    "Spring": 1,
    "Summer": 2,
    "Fall": 3,
}


def grade_point(grade: Optional[str]) -> float:
    """Return the grade point for a letter grade; unknown values give 0.0."""
    if not grade:
        return 0.0
    return GRADE_POINTS.get(grade, 0.0)


def is_valid_grade(grade: object) -> bool:
    """Whether the value is one of the accepted letter grades."""
    return isinstance(grade, str) and grade in VALID_GRADES


def is_graded(grade: Optional[str]) -> bool:
    """Whether the enrollment has a final grade (not in progress)."""
    return bool(grade)


def is_passing_grade(grade: Optional[str]) -> bool:
    """Whether the grade completes the course: present and not F."""
    return is_graded(grade) and grade != FAILING_GRADE


def semester_sort_key(semester: str) -> tuple[int, str]:
    """Sort key placing known semesters chronologically before unknown labels."""
    return (SEMESTER_ORDER.get(semester, -1), semester)


def build_transcript(student_id: str, entries: Iterable[TranscriptEntry]) -> TranscriptRecord:
    """Order transcript entries and compute total credits and GPA.

    Total credits count only passing grades. The GPA averages grade points
    weighted by credits over every graded entry, F included with 0.0;
    in-progress entries are ignored. A transcript with no graded entries
    has a GPA of 0.0.

    Args:
        student_id: Student the transcript belongs to.
        entries: Transcript entries in any order.

    Returns:
        TranscriptRecord with entries ordered most recent term first.
    """
    # Stable sorts: course ID ascending within a term, newest term first
    ordered = sorted(entries, key=lambda e: e.course_id)
    ordered.sort(key=lambda e: (e.year, semester_sort_key(e.semester)), reverse=True)

    total_credits = Decimal("0")
    graded_credits = Decimal("0")
    weighted_points = Decimal("0")
    for entry in ordered:
        if not is_graded(entry.grade):
            continue
        graded_credits += entry.credits
        weighted_points += entry.credits * Decimal(str(grade_point(entry.grade)))
        if is_passing_grade(entry.grade):
            total_credits += entry.credits

    gpa = 0.0
    if graded_credits > 0:
        gpa = float(round(weighted_points / graded_credits, 2))

    return TranscriptRecord(
        student_id=student_id,
        entries=tuple(ordered),
        total_credits=total_credits,
        gpa=gpa,
    )


def check_grade_shape(grade: object) -> str:
    """Reject values that cannot be a letter grade.

    Args:
        grade: Candidate grade value.

    Returns:
        The grade unchanged.

    Raises:
        InvalidGradeError: If the value is not a non-empty string of at most
            two characters without whitespace.
    """
    if not isinstance(grade, str) or not grade or len(grade) > 2:
        raise InvalidGradeError(grade)
    if any(ch.isspace() for ch in grade):
        raise InvalidGradeError(grade)
    return grade
