# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request and response models for registration, transcripts and grading."""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Request to register the current student for a section."""

    section_id: str = Field(..., min_length=1, max_length=30)


class DropRequest(BaseModel):
    """Request to drop a section."""

    section_id: str = Field(..., min_length=1, max_length=30)


class GradeUpdateRequest(BaseModel):
    """Request to record a student's grade in a section."""

    student_id: str = Field(..., min_length=1, max_length=20)
    section_id: str = Field(..., min_length=1, max_length=30)
    grade: str = Field(..., description="Letter grade, e.g. A, B+ or F")


class MessageResponse(BaseModel):
    """Generic acknowledgement."""

    message: str


class StudentSummary(BaseModel):
    """Student identity shown on a transcript."""

    id: str
    name: str
    dept_name: str | None = None


class CourseGrade(BaseModel):
    """One course line on a transcript."""

    course_id: str
    title: str
    section_id: str
    semester: str
    year: int
    credits: float
    grade: str | None = None
    grade_point: float | None = None


class Transcript(BaseModel):
    """Student transcript with derived totals."""

    student: StudentSummary
    courses: list[CourseGrade]
    total_credits: float
    gpa: float


class CurrentCourse(BaseModel):
    """A section the student is registered for."""

    course_id: str
    title: str
    credits: float
    section_id: str
    semester: str
    year: int
    building: str
    room_number: str
    days: list[str] = Field(default_factory=list)
    time: str | None = None
    grade: str | None = None


class SectionListing(BaseModel):
    """A section offering with its meeting time and free seats."""

    section_id: str
    course_id: str
    title: str
    credits: float
    semester: str
    year: int
    building: str
    room_number: str
    days: list[str] = Field(default_factory=list)
    time: str | None = None
    capacity: int
    enrolled: int
    available: int


class SectionStudent(BaseModel):
    """One student on a section roster."""

    student_id: str
    name: str
    dept_name: str | None = None
    grade: str | None = None
