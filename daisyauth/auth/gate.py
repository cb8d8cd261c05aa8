"""Authentication gate: per-request bearer token check.

The gate runs as a Flask before_request hook for every request:

    Authorization header missing or not "Bearer <token>"
        -> g.user = None, request continues anonymously
    token invalid, revoked, expired, or user unknown
        -> 401 {"error": "Unauthorized", "message": ...}, handler never runs
    token valid
        -> g.user / g.username / g.token set, request continues

Endpoints that need an identity enforce it themselves with @auth_required.
"""

import logging
from collections.abc import Callable

from flask import Flask, current_app, g, jsonify, request

from .schemas import UserResponse
from .token import TokenAuthenticator, TokenInvalid

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
EXTENSION_KEY = "daisyauth"


def unauthorized(message: str):
    """Build the fixed 401 response body."""
    return jsonify({"error": "Unauthorized", "message": message}), 401


class AuthenticationGate:
    """Binds a TokenAuthenticator and a user lookup to a Flask app."""

    def __init__(
        self,
        authenticator: TokenAuthenticator,
        load_user: Callable[[str], UserResponse | None],
    ):
        self.authenticator = authenticator
        self.load_user = load_user

    def init_app(self, app: Flask) -> None:
        app.extensions[EXTENSION_KEY] = self
        app.before_request(self.authenticate)

    def authenticate(self):
        """before_request hook. Returns a response only to halt the request."""
        g.user = None
        g.username = None
        g.token = None

        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith(BEARER_PREFIX):
            return None

        token = auth_header[len(BEARER_PREFIX):]
        try:
            result = self.authenticator.validate(token)
            if isinstance(result, TokenInvalid):
                logger.warning(f"Rejected bearer token on {request.path}: {result.message}")
                return unauthorized(result.message)

            user = self.load_user(result.subject)
        except Exception:
            logger.exception(f"Authentication failed unexpectedly on {request.path}")
            return unauthorized("Authentication failed")

        if user is None:
            logger.warning(f"Token subject no longer exists: {result.subject}")
            return unauthorized("User not found")

        g.user = user
        g.username = user.username
        g.token = token
        logger.debug(f"Authenticated {user.username} on {request.path}")
        return None


def get_gate() -> AuthenticationGate:
    return current_app.extensions[EXTENSION_KEY]


def get_authenticator() -> TokenAuthenticator:
    """Return the authenticator installed on the current app."""
    return get_gate().authenticator
