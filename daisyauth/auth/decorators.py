"""Authentication decorators for protected endpoints.

The AuthenticationGate has already validated any bearer token by the time a
view runs; these decorators only enforce that an identity is present.
"""

import logging
from functools import wraps

from flask import g, request

from ..exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def auth_required(f):
    """
    Decorator to require an authenticated user for endpoint access.

    Relies on flask.g populated by the gate:
    - g.user: UserResponse for the token's subject
    - g.username: Username
    - g.token: The raw bearer token

    Raises:
        AuthenticationError: If the request is anonymous

    Example:
    ```python
    @users_bp.get("/users")
    @auth_required
    def list_users():
        username = g.username
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        if g.get("user") is None:
            logger.warning(f"Unauthenticated request to protected endpoint {request.path}")
            raise AuthenticationError(
                "Authentication required",
                {"expected": "Authorization: Bearer <token>"}
            )
        return f(*args, **kwargs)

    return wrapper
