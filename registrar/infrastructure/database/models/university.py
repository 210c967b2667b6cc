# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""University records schema.

Departments, people, the course catalog, physical rooms and meeting times,
the sections offered in a term, who teaches them, and who takes them.
The ``takes`` table is the enrollment system of record; its composite
primary key (student_id, section_id) is the uniqueness constraint that
makes enrollment idempotent.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    ForeignKeyConstraint,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from registrar.infrastructure.database.models.base import Base


class Department(Base):
    """Academic department."""

    __tablename__ = "departments"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    building: Mapped[Optional[str]] = mapped_column(String(50))
    budget: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))

    def __repr__(self) -> str:
        return f"<Department(name={self.name})>"


class Student(Base):
    """Student record.

    ``tot_cred`` is a cached total maintained outside the enrollment
    workflow; transcripts always derive credits from ``takes``.
    """

    __tablename__ = "students"

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    dept_name: Mapped[Optional[str]] = mapped_column(
        String(50),
        ForeignKey("departments.name", ondelete="SET NULL"),
    )
    tot_cred: Mapped[Decimal] = mapped_column(Numeric(5, 1), default=Decimal("0"), nullable=False)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255))

    takes: Mapped[list["Takes"]] = relationship(back_populates="student")

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, name={self.name})>"


class Instructor(Base):
    """Instructor record."""

    __tablename__ = "instructors"

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    dept_name: Mapped[Optional[str]] = mapped_column(
        String(50),
        ForeignKey("departments.name", ondelete="SET NULL"),
    )
    salary: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    password_hash: Mapped[Optional[str]] = mapped_column(String(255))

    def __repr__(self) -> str:
        return f"<Instructor(id={self.id}, name={self.name})>"


class Course(Base):
    """Catalog course."""

    __tablename__ = "courses"
    __table_args__ = (CheckConstraint("credits > 0", name="credits_positive"),)

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    dept_name: Mapped[Optional[str]] = mapped_column(
        String(50),
        ForeignKey("departments.name", ondelete="SET NULL"),
    )
    credits: Mapped[Decimal] = mapped_column(Numeric(4, 1), nullable=False)

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, title={self.title})>"


class Prerequisite(Base):
    """Prerequisite edge: ``prereq_id`` must be passed before ``course_id``."""

    __tablename__ = "prerequisites"

    course_id: Mapped[str] = mapped_column(
        String(20),
        ForeignKey("courses.id", ondelete="CASCADE"),
        primary_key=True,
    )
    prereq_id: Mapped[str] = mapped_column(
        String(20),
        ForeignKey("courses.id", ondelete="CASCADE"),
        primary_key=True,
    )


class Classroom(Base):
    """Physical room with a seat capacity."""

    __tablename__ = "classrooms"

    building: Mapped[str] = mapped_column(String(50), primary_key=True)
    room_number: Mapped[str] = mapped_column(String(20), primary_key=True)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)


class TimeSlotRow(Base):
    """Weekly meeting time.

    ``days`` holds comma-separated weekday markers such as ``"1,3,5"``.
    """

    __tablename__ = "time_slots"

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    days: Mapped[str] = mapped_column(String(20), nullable=False)
    start_hr: Mapped[int] = mapped_column(Integer, nullable=False)
    start_min: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    end_hr: Mapped[int] = mapped_column(Integer, nullable=False)
    end_min: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Section(Base):
    """A course offered in a given term, room and time slot."""

    __tablename__ = "sections"
    __table_args__ = (
        ForeignKeyConstraint(
            ["building", "room_number"],
            ["classrooms.building", "classrooms.room_number"],
        ),
    )

    id: Mapped[str] = mapped_column(String(30), primary_key=True)
    course_id: Mapped[str] = mapped_column(
        String(20),
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    semester: Mapped[str] = mapped_column(String(10), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    building: Mapped[str] = mapped_column(String(50), nullable=False)
    room_number: Mapped[str] = mapped_column(String(20), nullable=False)
    time_slot_id: Mapped[Optional[str]] = mapped_column(
        String(20),
        ForeignKey("time_slots.id", ondelete="SET NULL"),
    )

    course: Mapped[Course] = relationship()

    def __repr__(self) -> str:
        return f"<Section(id={self.id}, course_id={self.course_id})>"


class Teaches(Base):
    """Teaching assignment of an instructor to a section."""

    __tablename__ = "teaches"

    instructor_id: Mapped[str] = mapped_column(
        String(20),
        ForeignKey("instructors.id", ondelete="CASCADE"),
        primary_key=True,
    )
    section_id: Mapped[str] = mapped_column(
        String(30),
        ForeignKey("sections.id", ondelete="CASCADE"),
        primary_key=True,
    )
    course_id: Mapped[str] = mapped_column(String(20), nullable=False)
    semester: Mapped[str] = mapped_column(String(10), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)


class Takes(Base):
    """Enrollment of a student in a section.

    A NULL grade means the course is in progress.
    """

    __tablename__ = "takes"

    student_id: Mapped[str] = mapped_column(
        String(20),
        ForeignKey("students.id", ondelete="CASCADE"),
        primary_key=True,
    )
    section_id: Mapped[str] = mapped_column(
        String(30),
        ForeignKey("sections.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    course_id: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    semester: Mapped[str] = mapped_column(String(10), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    grade: Mapped[Optional[str]] = mapped_column(String(2))

    student: Mapped[Student] = relationship(back_populates="takes")

    def __repr__(self) -> str:
        return f"<Takes(student_id={self.student_id}, section_id={self.section_id}, grade={self.grade})>"
