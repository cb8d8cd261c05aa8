"""Database module for daisyauth.

Core encapsulates connection management and exposes table operations as
lazily-created properties:

    # Autocommit (single read):
    with get_core() as core:
        row = core.user.get_by_username("alice")

    # Atomic (writes commit together on exit, roll back on error):
    with get_core(atomic=True) as core:
        core.user.create("alice", password_hash)

Every Core owns exactly one connection, which is closed when the context exits.
"""

import logging
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from ..config import settings

if TYPE_CHECKING:
    from .user import UserOperations

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


class Core:
    """
    Database Core with table operations.

    Connection Lifecycle:
    - atomic=True: commit on clean exit, rollback on exception
    - atomic=False: autocommit, every statement is its own transaction
    - in both modes the connection closes on __exit__
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        self._conn = connection
        self._atomic = atomic
        self._user_ops = None

    @property
    def user(self) -> "UserOperations":
        """User operations, created on first access."""
        if self._user_ops is None:
            from .user import UserOperations
            self._user_ops = UserOperations(self._conn)
        return self._user_ops

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "Core":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if self._atomic:
                if exc_type is None:
                    self._conn.commit()
                else:
                    self._conn.rollback()
        finally:
            self.close()


def _create_connection(atomic: bool) -> sqlite3.Connection:
    """Create a fresh database connection.

    check_same_thread is disabled because Flask may finish a request on a
    different worker thread than the one that opened the connection; each
    connection is still only used by one request.
    """
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(
        str(db_path),
        isolation_level="DEFERRED" if atomic else None,
        check_same_thread=False,
    )
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def get_core(atomic: bool = False) -> Core:
    """
    Get a database Core instance.

    Args:
        atomic: If True, statements run in one transaction committed when the
                context exits. If False (default), each statement autocommits.
    """
    return Core(_create_connection(atomic), atomic=atomic)


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

def init_db():
    """Initialize database by running schema.sql if not already initialized."""
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    try:
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            return

        conn.executescript(SCHEMA_PATH.read_text())
        conn.commit()
        logger.info(f"Database schema applied at {db_path}")
    finally:
        conn.close()
