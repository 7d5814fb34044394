"""
Pytest fixtures for the member service tests.

Each test gets its own in-memory SQLite database wired into the app via a
``get_db`` dependency override.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from member_platform.member_service.main import app
from member_platform.member_service.db import Base, get_db
from member_platform.member_service import models  # noqa: F401


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # No context manager: the lifespan would create tables on the real engine
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def guard():
    return app.state.token_guard


@pytest.fixture
def register(client):
    """Register a user and return the parsed response body."""
    def _register(email="a@x.com", password="123456", **fields):
        payload = {"email": email, "password": password, **fields}
        response = client.post("/auth/register", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _register


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
