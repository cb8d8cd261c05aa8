"""Shared test fixtures for daisyauth."""

import pytest

from daisyauth.auth import schemas, service
from daisyauth.auth.token import TokenAuthenticator
from daisyauth.config import settings
from daisyauth.db import get_core, init_db
from daisyauth.main import create_app


@pytest.fixture(autouse=True)
def fast_bcrypt():
    """Use the minimum bcrypt work factor so hashing doesn't dominate test time."""
    original = settings.bcrypt_work_factor
    settings.bcrypt_work_factor = 4
    yield
    settings.bcrypt_work_factor = original


@pytest.fixture
def test_db(tmp_path):
    """Point settings at a fresh temp-file database with the schema applied."""
    original_db_path = settings.database_path
    settings.database_path = str(tmp_path / "daisyauth.db")
    init_db()
    try:
        yield settings.database_path
    finally:
        settings.database_path = original_db_path


@pytest.fixture
def core(test_db):
    """Atomic Core committed at the end of the test."""
    with get_core(atomic=True) as core:
        yield core


@pytest.fixture
def authenticator():
    return TokenAuthenticator()


@pytest.fixture
def app(test_db, authenticator):
    app = create_app(authenticator=authenticator)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def test_user(test_db):
    """Create a registered user.

    Returns a tuple of (user, password) where user is the UserResponse schema
    and password is the plain text password.
    """
    password = "TestPass123"
    with get_core(atomic=True) as core:
        user = service.create_user(
            core, schemas.UserCreate(username="testuser", password=password)
        )
    return user, password


@pytest.fixture
def jwt_token(authenticator, test_user):
    """Bearer token for the test user, issued by the app's authenticator."""
    user, _password = test_user
    return authenticator.issue(user.username).raw


@pytest.fixture
def auth_headers(jwt_token):
    return {"Authorization": f"Bearer {jwt_token}"}
