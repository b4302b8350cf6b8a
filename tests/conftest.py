"""Pytest fixtures and configuration for taskhub tests."""

import os

# Keep the app's module-level engine off the filesystem during tests.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from taskhub.database.database import Base
from taskhub.database.models import UserDB
from taskhub.database.repository import TaskRepository
from taskhub.database.user_repository import UserRepository


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


def _make_user(session: Session, user_id: str, email: str, name: str = "Doe", firstname: str = "John") -> UserDB:
    now = datetime.utcnow()
    user_db = UserDB(
        id=user_id,
        name=name,
        firstname=firstname,
        email=email,
        created_at=now,
        updated_at=now,
    )
    session.add(user_db)
    session.commit()
    return user_db


@pytest.fixture(scope="function")
def db_session(test_user_id, other_user_id):
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    Also creates two users so ownership can be exercised.
    """
    from sqlalchemy import event

    # Create engine with StaticPool for in-memory database
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragmas(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Create all tables
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    _make_user(session, test_user_id, "john@mail.com")
    _make_user(session, other_user_id, "jane@mail.com", firstname="Jane")

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def test_user_id():
    """Owner of the tasks under test."""
    return "test-user-123"


@pytest.fixture
def other_user_id():
    """A second user whose tasks must stay untouched."""
    return "other-user-456"


@pytest.fixture
def task_repository(db_session: Session):
    """Create a TaskRepository instance for testing."""
    return TaskRepository(db_session)


@pytest.fixture
def user_repository(db_session: Session):
    """Create a UserRepository instance for testing."""
    return UserRepository(db_session)


@pytest.fixture
def sample_task_fields(test_user_id):
    """Valid task fields that can be overridden per test."""
    return {
        "name": "Test Task",
        "description": "Test description",
        "status": "created",
        "user_id": test_user_id,
    }


@pytest.fixture
def make_task(task_repository, sample_task_fields):
    """Factory that persists a task, overriding any of the sample fields."""
    def _make(**overrides):
        return task_repository.create({**sample_task_fields, **overrides})
    return _make


@pytest.fixture
def test_client(db_session: Session):
    """Create a FastAPI test client with overridden database dependency."""
    from taskhub.api.app import app
    from taskhub.database.database import get_db

    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()
