"""Pydantic schemas for user accounts and tokens."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


# ============================================================================
# Users
# ============================================================================


class UserBase(BaseModel):
    """Shared username rules for registration and login."""

    username: str = Field(..., min_length=1, max_length=64)

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        """Usernames are case-insensitive and stored lowercase."""
        if not USERNAME_PATTERN.match(v):
            raise ValueError(
                "Username may only contain letters, digits, '.', '_' and '-'"
            )
        return v.lower()


class UserCreate(UserBase):
    password: str = Field(..., min_length=8, max_length=72)

    @field_validator("password")
    @classmethod
    def fits_bcrypt(cls, v: str) -> str:
        # bcrypt only accepts up to 72 bytes of input
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password must be at most 72 bytes when UTF-8 encoded")
        return v


class UserLogin(BaseModel):
    """Login credentials.

    Only presence is checked here. Credentials that could never have been
    registered fail the lookup and get the same 401 as a wrong password.
    """

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("username")
    @classmethod
    def lowercase_username(cls, v: str) -> str:
        return v.lower()


class UserResponse(BaseModel):
    """User as returned to clients. Never carries the password hash."""

    id: str
    username: str
    created_at: str


# ============================================================================
# Tokens
# ============================================================================


class TokenResponse(BaseModel):
    """Body of a successful login."""

    token: str


class TokenClaims(BaseModel):
    """Verified payload of a bearer token."""

    sub: str
    iat: int
    exp: int
    jti: str | None = None


class IssuedToken(BaseModel):
    """A freshly minted token together with its decoded lifetime."""

    model_config = ConfigDict(frozen=True)

    raw: str
    subject: str
    issued_at: datetime
    expires_at: datetime
