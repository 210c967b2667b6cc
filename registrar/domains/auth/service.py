# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication service for issuing access tokens.

Students and instructors sign in with their record ID and the password
whose bcrypt hash is stored on their record. The administrator signs in
with the configured account.

Example:
    >>> auth_service = AuthService(db_session, jwt_manager, settings.admin)
    >>> token = await auth_service.login("S001", "secret", "student")
"""

import logging
import secrets

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from registrar.core.config.settings import AdminSettings
from registrar.domains.auth.jwt import JWTManager
from registrar.domains.auth.password import PasswordHasher
from registrar.domains.enrollment.errors import InfrastructureError
from registrar.infrastructure.database.models import Instructor, Student
from registrar.models.auth import Role, TokenResponse

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Base exception for authentication errors."""

    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when the ID, password or role do not match."""

    pass


class AuthService:
    """Authenticates users and issues access tokens.

    Attributes:
        _db: Database session for queries.
        _jwt_manager: JWT token manager.
        _admin: Configured administrator account.
        _hasher: Password hasher.
    """

    def __init__(
        self,
        db: AsyncSession,
        jwt_manager: JWTManager,
        admin: AdminSettings,
        hasher: PasswordHasher | None = None,
    ) -> None:
        """Initialize the authentication service.

        Args:
            db: Async database session.
            jwt_manager: JWT token manager.
            admin: Administrator credentials.
            hasher: Password hasher, a default one if omitted.
        """
        self._db = db
        self._jwt_manager = jwt_manager
        self._admin = admin
        self._hasher = hasher or PasswordHasher()

    async def login(self, user_id: str, password: str, role: Role) -> TokenResponse:
        """Authenticate and issue an access token.

        Args:
            user_id: Student ID, instructor ID or admin username.
            password: Plain text password.
            role: Role to sign in as.

        Returns:
            TokenResponse with the access token.

        Raises:
            InvalidCredentialsError: If authentication fails.
            InfrastructureError: If the records database is unavailable.
        """
        if role == "admin":
            name = self._authenticate_admin(user_id, password)
        else:
            name = await self._authenticate_member(user_id, password, role)

        token = self._jwt_manager.create_access_token(user_id=user_id, role=role, name=name)
        logger.info("User signed in: user=%s, role=%s", user_id, role)

        return TokenResponse(
            access_token=token,
            expires_in=self._jwt_manager.expires_in,
            user_id=user_id,
            role=role,
            name=name,
        )

    def _authenticate_admin(self, username: str, password: str) -> str:
        username_ok = secrets.compare_digest(username.encode(), self._admin.username.encode())
        password_ok = secrets.compare_digest(
            password.encode(),
            self._admin.password.get_secret_value().encode(),
        )
        if not (username_ok and password_ok):
            logger.warning("Failed admin sign-in for %s", username)
            raise InvalidCredentialsError("Invalid credentials")
        return "Administrator"

    async def _authenticate_member(self, user_id: str, password: str, role: Role) -> str:
        model = Student if role == "student" else Instructor
        try:
            record = await self._db.get(model, user_id)
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to load user", e) from e

        if record is None or not self._hasher.verify(password, record.password_hash):
            logger.warning("Failed sign-in: user=%s, role=%s", user_id, role)
            raise InvalidCredentialsError("Invalid credentials")
        return record.name
