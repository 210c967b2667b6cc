# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the HTTP API.

The application runs in-process over the seeded SQLite database with the
request session dependency pointed at the test engine.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr

from registrar.api.app import create_app
from registrar.api.dependencies import get_db, get_section_locks
from registrar.core.config.settings import AdminSettings, DatabaseSettings, JWTSettings, Settings
from registrar.domains.auth.jwt import JWTManager
from registrar.domains.enrollment.locks import SectionLockRegistry

TEST_PASSWORD = "registrar-test"

pytestmark = pytest.mark.integration


@pytest.fixture
def settings() -> Settings:
    """Create isolated settings for the test application."""
    return Settings(
        _env_file=None,
        environment="test",
        debug=False,
        database=DatabaseSettings(dsn="sqlite+aiosqlite:///:memory:"),
        jwt=JWTSettings(secret_key=SecretStr("api-test-secret")),
        admin=AdminSettings(username="admin", password=SecretStr("admin-test-password")),
    )


@pytest.fixture
def tokens(settings: Settings) -> JWTManager:
    return JWTManager(settings.jwt)


def bearer(tokens: JWTManager, user_id: str, role: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {tokens.create_access_token(user_id, role)}"}


@pytest_asyncio.fixture
async def client(settings: Settings, sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    """Create an HTTP client for the application."""
    app = create_app(settings)
    locks = SectionLockRegistry()

    async def override_get_db():
        async with sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_section_locks] = lambda: locks

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


class TestHealth:
    """Tests for health endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient) -> None:
        """Test the liveness endpoint."""
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["environment"] == "test"


class TestLogin:
    """Tests for POST /api/v1/auth/login."""

    @pytest.mark.asyncio
    async def test_student_login(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test that a student signs in with the stored password."""
        response = await client.post(
            "/api/v1/auth/login",
            json={"user_id": "S001", "password": TEST_PASSWORD, "role": "student"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["name"] == "Ada Lovelace"
        payload = tokens.decode_token(body["access_token"])
        assert payload.sub == "S001"
        assert payload.role == "student"

    @pytest.mark.asyncio
    async def test_wrong_role_rejected(self, client: AsyncClient) -> None:
        """Test that a student ID cannot sign in as an instructor."""
        response = await client.post(
            "/api/v1/auth/login",
            json={"user_id": "S001", "password": TEST_PASSWORD, "role": "instructor"},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "invalid_credentials"

    @pytest.mark.asyncio
    async def test_wrong_password_rejected(self, client: AsyncClient) -> None:
        """Test that a bad password is rejected."""
        response = await client.post(
            "/api/v1/auth/login",
            json={"user_id": "I100", "password": "nope", "role": "instructor"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_admin_login(self, client: AsyncClient) -> None:
        """Test the configured administrator account."""
        response = await client.post(
            "/api/v1/auth/login",
            json={"user_id": "admin", "password": "admin-test-password", "role": "admin"},
        )

        assert response.status_code == 200
        assert response.json()["role"] == "admin"


class TestRegistration:
    """Tests for the registration endpoints."""

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client: AsyncClient) -> None:
        """Test that anonymous requests are rejected."""
        response = await client.post("/api/v1/registration", json={"section_id": "CS101-1"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_requires_student_role(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test that instructors cannot register."""
        response = await client.post(
            "/api/v1/registration",
            json={"section_id": "CS101-1"},
            headers=bearer(tokens, "I100", "instructor"),
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_register_then_duplicate(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test a successful registration followed by a duplicate."""
        headers = bearer(tokens, "S001", "student")

        first = await client.post("/api/v1/registration", json={"section_id": "CS101-1"}, headers=headers)
        second = await client.post("/api/v1/registration", json={"section_id": "CS101-1"}, headers=headers)

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["error"] == "duplicate_enrollment"
        assert "detail" in second.json()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("section_id", "status_code", "error"),
        [
            ("XX999-1", 404, "section_not_found"),
            ("CS201-1", 422, "prerequisites_not_satisfied"),
        ],
    )
    async def test_rejections(
        self,
        client: AsyncClient,
        tokens: JWTManager,
        section_id: str,
        status_code: int,
        error: str,
    ) -> None:
        """Test rejection status codes and error bodies."""
        response = await client.post(
            "/api/v1/registration",
            json={"section_id": section_id},
            headers=bearer(tokens, "S001", "student"),
        )

        assert response.status_code == status_code
        assert response.json()["error"] == error

    @pytest.mark.asyncio
    async def test_schedule_conflict(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test that an overlapping section is rejected with 409."""
        headers = bearer(tokens, "S001", "student")
        await client.post("/api/v1/registration", json={"section_id": "CS101-1"}, headers=headers)

        response = await client.post("/api/v1/registration", json={"section_id": "MA101-1"}, headers=headers)

        assert response.status_code == 409
        assert response.json()["error"] == "schedule_conflict"

    @pytest.mark.asyncio
    async def test_section_full(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test that the third student in a two-seat room is rejected."""
        for student_id in ("S001", "S002"):
            response = await client.post(
                "/api/v1/registration",
                json={"section_id": "MA101-2"},
                headers=bearer(tokens, student_id, "student"),
            )
            assert response.status_code == 201

        response = await client.post(
            "/api/v1/registration",
            json={"section_id": "MA101-2"},
            headers=bearer(tokens, "S003", "student"),
        )

        assert response.status_code == 409
        assert response.json()["error"] == "section_full"

    @pytest.mark.asyncio
    async def test_unknown_student_token(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test a validly signed token for a student with no record."""
        response = await client.post(
            "/api/v1/registration",
            json={"section_id": "CS101-1"},
            headers=bearer(tokens, "S999", "student"),
        )

        assert response.status_code == 404
        assert response.json()["error"] == "student_not_found"

    @pytest.mark.asyncio
    async def test_missing_body_field(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test request validation of the registration body."""
        response = await client.post(
            "/api/v1/registration",
            json={},
            headers=bearer(tokens, "S001", "student"),
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_drop_by_path_and_body(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test both drop forms and dropping twice."""
        headers = bearer(tokens, "S001", "student")
        await client.post("/api/v1/registration", json={"section_id": "CS101-1"}, headers=headers)
        await client.post("/api/v1/registration", json={"section_id": "MA101-2"}, headers=headers)

        by_path = await client.delete("/api/v1/registration/CS101-1", headers=headers)
        by_body = await client.post(
            "/api/v1/registration/drop", json={"section_id": "MA101-2"}, headers=headers
        )
        again = await client.delete("/api/v1/registration/CS101-1", headers=headers)

        assert by_path.status_code == 200
        assert by_body.status_code == 200
        assert again.status_code == 404
        assert again.json()["error"] == "enrollment_not_found"


class TestStudentRecords:
    """Tests for transcript and course listing endpoints."""

    @pytest.mark.asyncio
    async def test_transcript_after_grading(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test that a recorded grade shows up on the transcript."""
        student = bearer(tokens, "S001", "student")
        await client.post("/api/v1/registration", json={"section_id": "CS101-1"}, headers=student)
        graded = await client.put(
            "/api/v1/instructors/grades",
            json={"student_id": "S001", "section_id": "CS101-1", "grade": "A-"},
            headers=bearer(tokens, "I100", "instructor"),
        )

        response = await client.get("/api/v1/students/me/transcript", headers=student)

        assert graded.status_code == 200
        assert response.status_code == 200
        body = response.json()
        assert body["student"]["id"] == "S001"
        assert body["gpa"] == 3.7
        assert body["total_credits"] == 3.0
        assert body["courses"][0]["grade"] == "A-"

    @pytest.mark.asyncio
    async def test_current_courses_filter(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test the semester and year filters on current courses."""
        headers = bearer(tokens, "S001", "student")
        await client.post("/api/v1/registration", json={"section_id": "CS101-1"}, headers=headers)

        fall = await client.get(
            "/api/v1/students/me/courses", params={"semester": "Fall", "year": 2024}, headers=headers
        )
        spring = await client.get(
            "/api/v1/students/me/courses", params={"semester": "Spring"}, headers=headers
        )

        assert [c["section_id"] for c in fall.json()] == ["CS101-1"]
        assert fall.json()[0]["time"] == "09:00-10:00"
        assert spring.json() == []

    @pytest.mark.asyncio
    async def test_admin_reads_any_transcript(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test that only administrators read other students' transcripts."""
        as_admin = await client.get(
            "/api/v1/students/S002/transcript", headers=bearer(tokens, "admin", "admin")
        )
        as_student = await client.get(
            "/api/v1/students/S002/transcript", headers=bearer(tokens, "S001", "student")
        )
        missing = await client.get(
            "/api/v1/students/S999/transcript", headers=bearer(tokens, "admin", "admin")
        )

        assert as_admin.status_code == 200
        assert as_admin.json()["courses"] == []
        assert as_student.status_code == 403
        assert missing.status_code == 404


class TestGrading:
    """Tests for instructor endpoints."""

    @pytest.mark.asyncio
    async def test_other_instructor_forbidden(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test that grading a section one does not teach is rejected."""
        await client.post(
            "/api/v1/registration",
            json={"section_id": "CS101-1"},
            headers=bearer(tokens, "S001", "student"),
        )

        response = await client.put(
            "/api/v1/instructors/grades",
            json={"student_id": "S001", "section_id": "CS101-1", "grade": "A"},
            headers=bearer(tokens, "I200", "instructor"),
        )

        assert response.status_code == 403
        assert response.json()["error"] == "not_teaching_section"

    @pytest.mark.asyncio
    async def test_invalid_grade(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test that grades off the scale are rejected with 422."""
        await client.post(
            "/api/v1/registration",
            json={"section_id": "CS101-1"},
            headers=bearer(tokens, "S001", "student"),
        )

        response = await client.put(
            "/api/v1/instructors/grades",
            json={"student_id": "S001", "section_id": "CS101-1", "grade": "Q"},
            headers=bearer(tokens, "I100", "instructor"),
        )

        assert response.status_code == 422
        assert response.json()["error"] == "invalid_grade"

    @pytest.mark.asyncio
    async def test_roster(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test the section roster for the teaching instructor."""
        for student_id in ("S002", "S001"):
            await client.post(
                "/api/v1/registration",
                json={"section_id": "CS101-1"},
                headers=bearer(tokens, student_id, "student"),
            )

        response = await client.get(
            "/api/v1/instructors/sections/CS101-1/students",
            headers=bearer(tokens, "I100", "instructor"),
        )

        assert response.status_code == 200
        assert [s["student_id"] for s in response.json()] == ["S001", "S002"]

    @pytest.mark.asyncio
    async def test_teaching_sections(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test that an instructor lists only the sections they teach."""
        response = await client.get(
            "/api/v1/instructors/sections",
            headers=bearer(tokens, "I200", "instructor"),
        )

        assert response.status_code == 200
        assert [s["section_id"] for s in response.json()] == ["MA101-2", "MA101-4"]

    @pytest.mark.asyncio
    async def test_teaching_sections_instructors_only(
        self, client: AsyncClient, tokens: JWTManager
    ) -> None:
        """Test that students and administrators have no teaching list."""
        for user_id, role in (("S001", "student"), ("admin", "admin")):
            response = await client.get(
                "/api/v1/instructors/sections",
                headers=bearer(tokens, user_id, role),
            )
            assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_students_cannot_grade(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test that the grading endpoint rejects students."""
        response = await client.put(
            "/api/v1/instructors/grades",
            json={"student_id": "S001", "section_id": "CS101-1", "grade": "A"},
            headers=bearer(tokens, "S001", "student"),
        )

        assert response.status_code == 403


class TestSections:
    """Tests for section browsing."""

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client: AsyncClient) -> None:
        """Test that browsing needs a token."""
        response = await client.get("/api/v1/sections")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_filters_and_seats(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test filtered browsing with free seats after a registration."""
        headers = bearer(tokens, "S001", "student")
        await client.post("/api/v1/registration", json={"section_id": "MA101-2"}, headers=headers)

        response = await client.get(
            "/api/v1/sections",
            params={"course_id": "MA101", "semester": "Fall", "year": 2024},
            headers=headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert [s["section_id"] for s in body] == ["MA101-1", "MA101-2", "MA101-3"]
        seats = {s["section_id"]: (s["capacity"], s["enrolled"], s["available"]) for s in body}
        assert seats["MA101-2"] == (2, 1, 1)

    @pytest.mark.asyncio
    async def test_instructor_filter(self, client: AsyncClient, tokens: JWTManager) -> None:
        """Test filtering by teaching instructor."""
        response = await client.get(
            "/api/v1/sections",
            params={"instructor_id": "I100"},
            headers=bearer(tokens, "S002", "student"),
        )

        assert response.status_code == 200
        assert [s["section_id"] for s in response.json()] == ["CS101-1"]
