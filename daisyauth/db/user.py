"""User table operations.

IMPORT CONVENTION:
- Core accesses these through core.user property
- Password hashing is NOT done here; callers pass an already-hashed value
  (see auth.service)
"""

import sqlite3

from ..utils import isodatetime, secret


class UserOperations:
    """Queries against the users table."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def create(self, username: str, password_hash: str) -> sqlite3.Row:
        """Insert a user with an auto-generated UUID.

        Raises:
            sqlite3.IntegrityError: If the username already exists
        """
        user_id = secret.generate_uuid()
        self._conn.execute(
            """INSERT INTO users (id, username, password_hash, created_at)
               VALUES (?, ?, ?, ?)""",
            (user_id, username, password_hash, isodatetime.now())
        )
        return self._conn.execute(
            "SELECT * FROM users WHERE id = ?", (user_id,)
        ).fetchone()

    def get_by_username(self, username: str) -> sqlite3.Row | None:
        return self._conn.execute(
            "SELECT * FROM users WHERE username = ?", (username,)
        ).fetchone()

    def list_all(self) -> list[sqlite3.Row]:
        return self._conn.execute(
            "SELECT * FROM users ORDER BY created_at, username"
        ).fetchall()
