"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from rencontre_repas import models  # noqa: F401
from rencontre_repas.config import Settings
from rencontre_repas.database import Base
from rencontre_repas.main import create_app
from rencontre_repas.services.hashing import PasswordHasher
from rencontre_repas.services.user_store import UserStore

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

VALID_SIGNUP = {
    "name": "Ana",
    "email": "a@x.com",
    "password": "secret1",
    "food_pref": "sushi",
    "hobby": "chess",
}


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield
    engine.dispose()


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def settings():
    """Settings pointing at the test database with a cheap bcrypt cost."""
    return Settings(database_url=SQLALCHEMY_DATABASE_URL, bcrypt_rounds=4, environment="test")


@pytest.fixture
def app(settings):
    """Create an application bound to the test database."""
    return create_app(settings)


@pytest.fixture
def client(app):
    """Create a test client; entering it runs the app's startup."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def store(db):
    """User store over the test session."""
    return UserStore(db)


@pytest.fixture
def hasher():
    """Password hasher with the minimum bcrypt cost."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def signup_data():
    """A complete, valid signup submission."""
    return dict(VALID_SIGNUP)
