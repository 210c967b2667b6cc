# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""bcrypt password hashes for student and instructor accounts.

The hashes live in the ``password_hash`` column of the student and
instructor tables. Accounts created without a password have no hash and
can never sign in.
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Hashes and checks account passwords."""

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password for storage.

        Raises:
            ValueError: If the password is empty or longer than bcrypt accepts.
        """
        encoded = password.encode("utf-8")
        if not encoded:
            raise ValueError("Password cannot be empty")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str | None) -> bool:
        """Whether the password matches the stored hash.

        A missing or unreadable stored hash never matches.
        """
        if not password or not password_hash:
            return False
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
        except ValueError as e:
            logger.warning("Stored password hash is unreadable: %s", str(e))
            return False
