"""
Test configuration and fixtures for Recipe Pal.

- Function-scoped engine: a fresh in-memory SQLite database per test
  (or TEST_DATABASE_URL, e.g. a disposable PostgreSQL database)
- Session bound to that engine, injected into the app's get_db dependency
- Authenticated client fixtures using bearer tokens
"""

import os
import secrets
from datetime import datetime, timedelta, timezone
from typing import Generator

# Keep app.database from trying to reach the default PostgreSQL host on import
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import User, Session as UserSession
from tests.factories import create_user


# =============================================================================
# Database Fixtures
# =============================================================================


def get_test_database_url() -> str:
    """
    Get the test database URL.

    Priority:
    1. TEST_DATABASE_URL environment variable
    2. In-memory SQLite
    """
    return os.environ.get("TEST_DATABASE_URL", "sqlite://")


@pytest.fixture
def test_engine():
    """
    Create an engine with all tables for a single test.

    In-memory SQLite uses StaticPool so the TestClient thread sees the same
    database as the test body.
    """
    database_url = get_test_database_url()

    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url)

    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(test_engine) -> Generator[Session, None, None]:
    """Provide a database session; the whole database is discarded after the test."""
    TestingSessionLocal = sessionmaker(
        bind=test_engine, autocommit=False, autoflush=False
    )
    session = TestingSessionLocal()

    yield session

    session.close()


# =============================================================================
# TestClient Fixtures
# =============================================================================


def _override_db(db: Session):
    def override_get_db():
        try:
            yield db
        finally:
            pass  # Don't close - managed by db fixture

    return override_get_db


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """
    TestClient with database dependency override.

    The database session is injected into the app's get_db dependency.
    """
    app.dependency_overrides[get_db] = _override_db(db)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Authentication Fixtures
# =============================================================================


@pytest.fixture
def test_user(db: Session) -> User:
    """Create a test user."""
    return create_user(
        db, email="testuser@example.com", password="testpassword123", name="Test User"
    )


@pytest.fixture
def other_user(db: Session) -> User:
    """A second user, for ownership checks."""
    return create_user(
        db, email="otheruser@example.com", password="otherpassword123", name="Other User"
    )


@pytest.fixture
def test_session(db: Session, test_user: User) -> UserSession:
    """Create a test session for the test user."""
    session = UserSession(
        user_id=test_user.id,
        token=secrets.token_urlsafe(32),
        expires_at=datetime.now(timezone.utc) + timedelta(days=7),
        user_agent="pytest-test-client",
        ip_address="127.0.0.1",
    )
    db.add(session)
    db.flush()
    return session


@pytest.fixture
def auth_headers(test_session: UserSession) -> dict:
    """Bearer header for the test user."""
    return {"Authorization": f"Bearer {test_session.token}"}


@pytest.fixture
def auth_client(
    db: Session, test_session: UserSession
) -> Generator[TestClient, None, None]:
    """
    Authenticated TestClient for the test user.

    Creates a separate TestClient instance so headers don't leak into `client`.
    """
    app.dependency_overrides[get_db] = _override_db(db)

    with TestClient(app) as test_client:
        test_client.headers["Authorization"] = f"Bearer {test_session.token}"
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# pytest markers
# =============================================================================


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers",
        "security: marks tests as security tests (deselect with '-m not security')",
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
