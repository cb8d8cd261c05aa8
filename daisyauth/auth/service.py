"""User account service: password hashing, registration and credential checks.

Functions take a db Core so callers control the transaction boundary:

    with get_core(atomic=True) as core:
        user = service.create_user(core, data)
"""

import logging
import sqlite3

import bcrypt

from ..config import settings
from ..db import Core, get_core
from ..exceptions import UsernameTakenError
from .schemas import UserCreate, UserResponse

logger = logging.getLogger(__name__)


# ============================================================================
# Password Hashing
# ============================================================================


def hash_password(password: str) -> str:
    """Hash a password with bcrypt using the configured work factor."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_work_factor)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plain password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash, or a password bcrypt refuses to hash
        logger.warning("Password could not be checked against stored hash")
        return False


# ============================================================================
# Users
# ============================================================================


def _row_to_user(row: sqlite3.Row) -> UserResponse:
    return UserResponse(id=row["id"], username=row["username"], created_at=row["created_at"])


def create_user(core: Core, data: UserCreate) -> UserResponse:
    """Register a new user.

    Raises:
        UsernameTakenError: If the username is already registered
    """
    try:
        row = core.user.create(data.username, hash_password(data.password))
    except sqlite3.IntegrityError:
        logger.warning(f"Registration failed (username exists): {data.username}")
        raise UsernameTakenError(details={"username": data.username})

    logger.info(f"User registered: {data.username}")
    return _row_to_user(row)


def get_user_by_username(core: Core, username: str) -> UserResponse | None:
    row = core.user.get_by_username(username.lower())
    return _row_to_user(row) if row else None


def verify_credentials(core: Core, username: str, password: str) -> UserResponse | None:
    """Return the user if the password matches, None otherwise."""
    row = core.user.get_by_username(username.lower())
    if row is None or not verify_password(password, row["password_hash"]):
        return None
    return _row_to_user(row)


def list_users(core: Core) -> list[UserResponse]:
    return [_row_to_user(row) for row in core.user.list_all()]


def load_user(username: str) -> UserResponse | None:
    """Look up a user with a connection of its own.

    Used by the authentication gate, which runs outside any handler's Core.
    """
    with get_core() as core:
        return get_user_by_username(core, username)
