# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain exceptions.

Every rejection the enrollment workflow can produce is a distinct type
carrying a stable ``code`` and the HTTP ``status_code`` the API layer
renders it with. Callers branch on the type, never on the message.
"""

from typing import Optional


class EnrollmentError(Exception):
    """Base exception for enrollment operations.

    Attributes:
        message: Human-readable error description.
        code: Stable machine-readable error code.
        status_code: HTTP status the API layer responds with.
    """

    code: str = "enrollment_error"
    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(EnrollmentError):
    """A referenced entity does not exist."""

    code = "not_found"
    status_code = 404


class StudentNotFoundError(NotFoundError):
    """Student does not exist."""

    code = "student_not_found"

    def __init__(self, student_id: str) -> None:
        super().__init__(f"Student not found: {student_id}")
        self.student_id = student_id


class SectionNotFoundError(NotFoundError):
    """Section does not exist."""

    code = "section_not_found"

    def __init__(self, section_id: str) -> None:
        super().__init__(f"Section not found: {section_id}")
        self.section_id = section_id


class CourseNotFoundError(NotFoundError):
    """Course does not exist."""

    code = "course_not_found"

    def __init__(self, course_id: str) -> None:
        super().__init__(f"Course not found: {course_id}")
        self.course_id = course_id


class ClassroomNotFoundError(NotFoundError):
    """Classroom does not exist."""

    code = "classroom_not_found"

    def __init__(self, building: str, room_number: str) -> None:
        super().__init__(f"Classroom not found: {building} {room_number}")
        self.building = building
        self.room_number = room_number


class TimeSlotNotFoundError(NotFoundError):
    """Time slot does not exist."""

    code = "time_slot_not_found"

    def __init__(self, time_slot_id: str) -> None:
        super().__init__(f"Time slot not found: {time_slot_id}")
        self.time_slot_id = time_slot_id


class EnrollmentNotFoundError(NotFoundError):
    """Student is not enrolled in the section."""

    code = "enrollment_not_found"

    def __init__(self, student_id: str, section_id: str) -> None:
        super().__init__(f"Student {student_id} is not enrolled in section {section_id}")
        self.student_id = student_id
        self.section_id = section_id


class DuplicateEnrollmentError(EnrollmentError):
    """Student is already enrolled in the section."""

    code = "duplicate_enrollment"
    status_code = 409

    def __init__(self, student_id: str, section_id: str) -> None:
        super().__init__(f"Student {student_id} is already registered for section {section_id}")
        self.student_id = student_id
        self.section_id = section_id


class PrerequisitesNotSatisfiedError(EnrollmentError):
    """Student has not passed every prerequisite of the course."""

    code = "prerequisites_not_satisfied"
    status_code = 422

    def __init__(self, student_id: str, course_id: str) -> None:
        super().__init__(f"Prerequisites not satisfied for course {course_id}")
        self.student_id = student_id
        self.course_id = course_id


class ScheduleConflictError(EnrollmentError):
    """Section meets at the same time as one the student already takes."""

    code = "schedule_conflict"
    status_code = 409

    def __init__(self, student_id: str, section_id: str) -> None:
        super().__init__(f"Section {section_id} conflicts with the current schedule")
        self.student_id = student_id
        self.section_id = section_id


class SectionFullError(EnrollmentError):
    """Section has reached its classroom capacity."""

    code = "section_full"
    status_code = 409

    def __init__(self, section_id: str) -> None:
        super().__init__(f"Section {section_id} is full")
        self.section_id = section_id


class InvalidGradeError(EnrollmentError):
    """Grade value is not an accepted grade."""

    code = "invalid_grade"
    status_code = 422

    def __init__(self, grade: object) -> None:
        super().__init__(f"Invalid grade: {grade!r}")
        self.grade = grade


class NotTeachingSectionError(EnrollmentError):
    """Instructor is not assigned to the section."""

    code = "not_teaching_section"
    status_code = 403

    def __init__(self, instructor_id: str, section_id: str) -> None:
        super().__init__(f"Instructor {instructor_id} does not teach section {section_id}")
        self.instructor_id = instructor_id
        self.section_id = section_id


class InfrastructureError(EnrollmentError):
    """Storage failure underneath an enrollment operation.

    Attributes:
        original_error: The underlying database error.
    """

    code = "infrastructure_error"
    status_code = 500

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message
