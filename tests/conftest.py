"""
Pytest configuration and fixtures for the test suite.
"""
import os
import pytest
from typing import Generator
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

# Set test environment before importing app
TEST_SECRET = "test-secret-key-for-testing-purposes-only-32chars"
os.environ["ENV"] = "development"
os.environ["JWT_SECRET_KEY"] = TEST_SECRET

from social_api.core.config import Settings
from social_api.db.session import Database
from social_api.main import create_app
from social_api.models.thought import Thought
from social_api.models.user import User
from social_api.services import thoughts as thought_service
from social_api.services import users as user_service
from social_api.services.auth import TokenService


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a fresh SQLite file per test."""
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        JWT_SECRET_KEY=TEST_SECRET,
    )


@pytest.fixture
def database(test_settings: Settings) -> Generator[Database, None, None]:
    database = Database(test_settings)
    database.create_all()
    try:
        yield database
    finally:
        database.dispose()


@pytest.fixture
def db(database: Database) -> Generator[Session, None, None]:
    """Session on the same store the test app uses."""
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI, database: Database) -> Generator[TestClient, None, None]:
    """Create a test client; entering it runs the app's startup."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token_service(test_settings: Settings) -> TokenService:
    return TokenService.from_settings(test_settings)


@pytest.fixture
def auth_headers(token_service: TokenService) -> dict:
    """Create authentication headers for a test subject."""
    token = token_service.issue("test-subject", {"username": "testuser"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def gated_client(test_settings: Settings, database: Database) -> Generator[TestClient, None, None]:
    """Test client for an app with the auth gate attached."""
    gated_settings = test_settings.model_copy(update={"AUTH_REQUIRED": True})
    with TestClient(create_app(gated_settings)) as test_client:
        yield test_client


@pytest.fixture
def test_user(db: Session) -> User:
    """Create a test user."""
    return user_service.create_user(
        db,
        {"username": "testuser", "email": "test@example.com", "password": "TestPassword123!"},
    )


@pytest.fixture
def other_user(db: Session) -> User:
    """Create another test user."""
    return user_service.create_user(
        db,
        {"username": "otheruser", "email": "other@example.com", "password": "OtherPassword123!"},
    )


@pytest.fixture
def test_thought(db: Session, test_user: User) -> Thought:
    """Create a thought authored by the test user."""
    return thought_service.create_thought(
        db,
        {"thoughtText": "First thought", "username": test_user.username, "userId": test_user.id},
    )
