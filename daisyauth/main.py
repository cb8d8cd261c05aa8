"""Flask application entry point."""

import logging

from flask import Flask, jsonify
from flask_cors import CORS

from .api import users_bp
from .auth import service
from .auth.gate import AuthenticationGate, unauthorized
from .auth.token import TokenAuthenticator
from .config import settings
from .db import init_db
from .exceptions import AuthenticationError, DaisyAuthError, ResourceNotFound, ValidationError

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# ============================================================================
# Error handlers
# ============================================================================


def _error_response(label: str, error: DaisyAuthError, status: int):
    response = {"error": label, "message": error.message}
    if error.details:
        response["details"] = error.details
    return jsonify(response), status


def handle_authentication_error(error):
    """Every authentication failure is a 401 with exactly error/message."""
    return unauthorized(error.message)


def handle_validation_error(error):
    return _error_response("Bad Request", error, 400)


def handle_not_found(error):
    return _error_response("Not Found", error, 404)


def handle_daisyauth_error(error):
    """Handle any other DaisyAuthError as a server-side failure."""
    logger.error(f"{error.__class__.__name__}: {error.message}")
    return _error_response(error.__class__.__name__, error, 500)


def handle_internal_error(error):
    """Handle internal server errors."""
    logger.error(f"Internal error: {error}")
    return jsonify({
        "error": "InternalServerError",
        "message": "An internal error occurred"
    }), 500


def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


# ============================================================================
# Application factory
# ============================================================================


def create_app(authenticator: TokenAuthenticator | None = None) -> Flask:
    """Build the Flask app.

    Args:
        authenticator: Token authenticator shared by all requests of this app.
            A new one (fresh signing key, empty revocation set) is created
            when omitted.
    """
    app = Flask(__name__)

    CORS(app, origins=settings.cors_origins, supports_credentials=True)

    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    app.register_error_handler(AuthenticationError, handle_authentication_error)
    app.register_error_handler(ValidationError, handle_validation_error)
    app.register_error_handler(ResourceNotFound, handle_not_found)
    app.register_error_handler(DaisyAuthError, handle_daisyauth_error)
    app.register_error_handler(500, handle_internal_error)

    gate = AuthenticationGate(authenticator or TokenAuthenticator(), service.load_user)
    gate.init_app(app)

    app.add_url_rule("/health", "health", health)
    app.register_blueprint(users_bp, url_prefix=settings.api_prefix)

    return app


if __name__ == "__main__":
    create_app().run(debug=True, threaded=True)
