# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
import pytest
from fastapi.testclient import TestClient
from social_api.config import Settings
from social_api.db.base import Base
from social_api.db.session import build_engine, build_session_factory
from social_api.main import create_app
import social_api.db.models  # noqa: F401

TEST_SECRET = "test-secret-key"
TEST_PASSWORD = "secret1"


@pytest.fixture()
def settings():
    return Settings(
        DATABASE_URL="sqlite://",
        SECRET_KEY=TEST_SECRET,
        BCRYPT_ROUNDS=10,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    # Entering the context runs the lifespan, which creates the tables
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db_session():
    """Standalone in-memory database for service-level tests"""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def register(client):
    def _register(username, email=None, password=TEST_PASSWORD):
        return client.post(
            "/auth/register",
            json={"username": username, "email": email or f"{username}@x.com", "password": password},
        )
    return _register


@pytest.fixture()
def login(client):
    def _login(identifier, password=TEST_PASSWORD):
        return client.post("/auth/login", json={"username": identifier, "password": password})
    return _login


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_headers():
    return bearer


@pytest.fixture()
def alice(register):
    return register("alice").json()


@pytest.fixture()
def bob(register):
    return register("bob").json()
