"""User account endpoints.

- POST /api/register - Create an account
- POST /api/login    - Exchange credentials for a bearer token
- GET  /api/users    - List all users (authenticated)
- POST /api/logout   - Revoke the presented bearer token (authenticated)

Bearer tokens are checked by the AuthenticationGate before any of these
views run; @auth_required only asserts that the gate found an identity.
"""

import logging

from flask import Blueprint, g, jsonify

from ..auth import service
from ..auth.decorators import auth_required
from ..auth.gate import get_authenticator
from ..auth.schemas import TokenResponse, UserCreate, UserLogin
from ..db import get_core
from ..exceptions import UnauthenticatedError
from .validation import validate_request

logger = logging.getLogger(__name__)


users_bp = Blueprint("users", __name__)


@users_bp.post("/register")
@validate_request
def register(data: UserCreate):
    """
    Register a new user.

    Example request:
    ```json
    {"username": "alice", "password": "SecurePass123"}
    ```

    Example response (201):
    ```json
    {
        "id": "550e8400-e29b-41d4-a716-446655440000",
        "username": "alice",
        "created_at": "2026-10-17T10:30:00Z"
    }
    ```

    Raises:
        UsernameTakenError: If the username is already registered (401)
        ValidationError: If the request body is invalid (400)
    """
    with get_core(atomic=True) as core:
        user = service.create_user(core, data)

    return jsonify(user.model_dump()), 201


@users_bp.post("/login")
@validate_request
def login(data: UserLogin):
    """
    Authenticate a user and return a bearer token.

    Example response (200):
    ```json
    {"token": "eyJhbGciOiJIUzUxMiIsInR5cCI6IkpXVCJ9..."}
    ```

    Raises:
        UnauthenticatedError: Unknown username or wrong password (401)
    """
    with get_core() as core:
        user = service.verify_credentials(core, data.username, data.password)

    if user is None:
        logger.warning(f"Failed login attempt for username: {data.username}")
        raise UnauthenticatedError(details={"username": data.username})

    issued = get_authenticator().issue(user.username)
    logger.info(f"Successful login: {user.username}")

    return jsonify(TokenResponse(token=issued.raw).model_dump()), 200


@users_bp.get("/users")
@auth_required
def list_users():
    """List all registered users. Password hashes are never included."""
    with get_core() as core:
        users = service.list_users(core)

    return jsonify([user.model_dump() for user in users]), 200


@users_bp.post("/logout")
@auth_required
def logout():
    """
    Revoke the bearer token used for this request.

    A second logout with the same token is rejected by the gate with
    401 "Token has been invalidated".
    """
    get_authenticator().revoke(g.token)
    logger.info(f"Logged out: {g.username}")

    return jsonify({"message": "Successfully logged out"}), 200
