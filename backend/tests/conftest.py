"""
Shared fixtures: a fresh in-memory database and application per test.
"""

import pytest
from fastapi.testclient import TestClient

from app.app_factory import create_app
from core.config import Settings
from tests.factories import AdminFactory, BaseFactory, UserFactory

TEST_SECRET = "test-secret-key-for-testing-only"


def make_settings(**overrides) -> Settings:
    values = {
        "environment": "test",
        "database_url": "sqlite://",
        "jwt_secret_key": TEST_SECRET,
        "bcrypt_rounds": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client; entering it runs the startup checks and creates tables."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app, client):
    """Database session bound to the factories"""
    session = app.state.session_factory()
    BaseFactory.bind(session)
    yield session
    BaseFactory.reset_session()
    session.close()


@pytest.fixture
def credentials(app):
    return app.state.credentials


@pytest.fixture
def test_user(db):
    return UserFactory()


@pytest.fixture
def admin_user(db):
    return AdminFactory()


@pytest.fixture
def user_headers(test_user, credentials):
    token = credentials.issue_token(str(test_user.id), test_user.email, test_user.role.value)
    return bearer(token)


@pytest.fixture
def admin_headers(admin_user, credentials):
    token = credentials.issue_token(str(admin_user.id), admin_user.email, admin_user.role.value)
    return bearer(token)
