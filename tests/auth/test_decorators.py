"""Tests for the @auth_required decorator."""

import pytest
from flask import Flask, g, jsonify

from daisyauth.auth.decorators import auth_required
from daisyauth.auth.gate import AuthenticationGate
from daisyauth.auth.schemas import UserResponse
from daisyauth.auth.token import TokenAuthenticator
from daisyauth.exceptions import AuthenticationError
from daisyauth.main import handle_authentication_error


ALICE = UserResponse(id="u-1", username="alice", created_at="2026-10-17T00:00:00Z")


@pytest.fixture
def protected_app():
    app = Flask(__name__)
    app.config["TESTING"] = True
    authenticator = TokenAuthenticator()
    AuthenticationGate(authenticator, {"alice": ALICE}.get).init_app(app)
    app.register_error_handler(AuthenticationError, handle_authentication_error)

    @app.get("/protected")
    @auth_required
    def protected():
        return jsonify({"username": g.username, "token": g.token})

    @app.get("/public")
    def public():
        return jsonify({"username": g.username})

    return app, authenticator


class TestAuthRequired:
    def test_anonymous_request_rejected(self, protected_app):
        app, _authenticator = protected_app

        response = app.test_client().get("/protected")

        assert response.status_code == 401
        assert response.get_json() == {
            "error": "Unauthorized",
            "message": "Authentication required",
        }

    def test_authenticated_request_allowed(self, protected_app):
        app, authenticator = protected_app
        token = authenticator.issue("alice").raw

        response = app.test_client().get(
            "/protected", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        assert response.get_json() == {"username": "alice", "token": token}

    def test_public_route_stays_anonymous(self, protected_app):
        app, _authenticator = protected_app

        response = app.test_client().get("/public")

        assert response.status_code == 200
        assert response.get_json() == {"username": None}

    def test_preserves_function_name(self):
        @auth_required
        def my_view():
            pass

        assert my_view.__name__ == "my_view"
