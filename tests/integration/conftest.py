# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fixtures for integration tests against an in-memory SQLite database.

The schema is created from the ORM metadata and seeded with a small
catalog close to the in-memory one in ``tests/conftest.py``; here
MA101-3 has no meeting time.
"""

from decimal import Decimal
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from registrar.domains.auth.password import PasswordHasher
from registrar.infrastructure.database.models import (
    Base,
    Classroom,
    Course,
    Department,
    Instructor,
    Prerequisite,
    Section,
    Student,
    Teaches,
    TimeSlotRow,
)

TEST_PASSWORD = "registrar-test"


def _seed_rows(password_hash: str) -> list:
    return [
        Department(name="Comp. Sci.", building="Taylor", budget=Decimal("100000")),
        Department(name="Math", building="Watson", budget=Decimal("80000")),
        Student(id="S001", name="Ada Lovelace", dept_name="Comp. Sci.", password_hash=password_hash),
        Student(id="S002", name="Grace Hopper", dept_name="Comp. Sci.", password_hash=password_hash),
        Student(id="S003", name="Alan Turing", dept_name="Math", password_hash=password_hash),
        Student(id="S004", name="Edsger Dijkstra", dept_name="Comp. Sci.", password_hash=password_hash),
        Instructor(id="I100", name="Donald Knuth", dept_name="Comp. Sci.", password_hash=password_hash),
        Instructor(id="I200", name="Emmy Noether", dept_name="Math", password_hash=password_hash),
        Course(id="CS101", title="Intro to Programming", dept_name="Comp. Sci.", credits=Decimal("3")),
        Course(id="CS201", title="Data Structures", dept_name="Comp. Sci.", credits=Decimal("4")),
        Course(id="MA101", title="Calculus I", dept_name="Math", credits=Decimal("3")),
        Prerequisite(course_id="CS201", prereq_id="CS101"),
        Classroom(building="Watson", room_number="100", capacity=30),
        Classroom(building="Annex", room_number="1", capacity=2),
        TimeSlotRow(id="MW-AM", days="1,3", start_hr=9, start_min=0, end_hr=10, end_min=0),
        TimeSlotRow(id="MW-LATE", days="1,3", start_hr=10, start_min=0, end_hr=11, end_min=0),
        TimeSlotRow(id="M-OVERLAP", days="1", start_hr=9, start_min=30, end_hr=10, end_min=30),
        TimeSlotRow(id="TT-AM", days="2,4", start_hr=9, start_min=0, end_hr=10, end_min=0),
        Section(id="CS101-1", course_id="CS101", semester="Fall", year=2024,
                building="Watson", room_number="100", time_slot_id="MW-AM"),
        Section(id="CS201-1", course_id="CS201", semester="Spring", year=2025,
                building="Watson", room_number="100", time_slot_id="MW-LATE"),
        Section(id="MA101-1", course_id="MA101", semester="Fall", year=2024,
                building="Watson", room_number="100", time_slot_id="M-OVERLAP"),
        Section(id="MA101-2", course_id="MA101", semester="Fall", year=2024,
                building="Annex", room_number="1", time_slot_id="TT-AM"),
        Section(id="MA101-3", course_id="MA101", semester="Fall", year=2024,
                building="Watson", room_number="100", time_slot_id=None),
        Section(id="MA101-4", course_id="MA101", semester="Spring", year=2025,
                building="Watson", room_number="100", time_slot_id="MW-AM"),
        Teaches(instructor_id="I100", section_id="CS101-1", course_id="CS101",
                semester="Fall", year=2024),
        Teaches(instructor_id="I200", section_id="MA101-2", course_id="MA101",
                semester="Fall", year=2024),
        Teaches(instructor_id="I200", section_id="MA101-4", course_id="MA101",
                semester="Spring", year=2025),
    ]


async def _create_and_seed(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    sessionmaker = async_sessionmaker(engine, expire_on_commit=False)
    async with sessionmaker() as session:
        session.add_all(_seed_rows(PasswordHasher(rounds=4).hash(TEST_PASSWORD)))
        await session.commit()


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a seeded in-memory SQLite engine shared by all sessions."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await _create_and_seed(engine)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def file_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a seeded file-backed SQLite engine with a connection per session."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'registrar.db'}")
    await _create_and_seed(engine)

    yield engine
    await engine.dispose()


@pytest.fixture
def sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test engine."""
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session on the seeded database."""
    async with sessionmaker() as session:
        yield session
