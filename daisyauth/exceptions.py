"""Exception hierarchy for daisyauth.

Every error raised by the service derives from DaisyAuthError, which carries a
human-readable message and an optional details dict. The Flask error handlers
in main.py map each family to an HTTP status:

- AuthenticationError (and all token errors) -> 401
- ValidationError -> 400
- ResourceNotFound -> 404
- anything else -> 500
"""


class DaisyAuthError(Exception):
    """Base exception for all daisyauth errors."""

    default_message = "An error occurred"

    def __init__(self, message: str | None = None, details: dict | None = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(DaisyAuthError):
    """Request data failed validation."""

    default_message = "Invalid request data"


class ResourceNotFound(DaisyAuthError):
    """Requested resource does not exist."""

    default_message = "Resource not found"


class DatabaseError(DaisyAuthError):
    """Database operation failed."""

    default_message = "Database operation failed"


class AuthenticationError(DaisyAuthError):
    """Request could not be authenticated."""

    default_message = "Authentication required"


# ============================================================================
# Token failures
# ============================================================================


class TokenError(AuthenticationError):
    """Base class for failures reported by the token authenticator."""


class EmptyTokenError(TokenError):
    default_message = "Token cannot be empty"


class TokenRevokedError(TokenError):
    default_message = "Token has been invalidated"


class InvalidOrExpiredTokenError(TokenError):
    """Signature mismatch, malformed encoding or expiry passed.

    The three causes are deliberately reported with the same message.
    """

    default_message = "Invalid or expired token"


# ============================================================================
# Account failures
# ============================================================================


class UsernameTakenError(AuthenticationError):
    default_message = "Username already exists"


class UnauthenticatedError(AuthenticationError):
    """Login failed: unknown username or wrong password."""

    default_message = "User not registered"
