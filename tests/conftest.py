"""
Test configuration and fixtures for NovelVerse API tests.
"""
import os

# Must be set before novelverse reads its settings
os.environ["ENVIRONMENT"] = "testing"
os.environ["STORAGE_BACKEND"] = "database"

from typing import Any, Dict, Generator

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import novelverse.models  # noqa: F401
from novelverse.core.auth import create_access_token
from novelverse.core.constants import Genre
from novelverse.core.database import Base, get_db
from novelverse.main import app
from novelverse.schemas.chapter import ChapterCreate, ChapterResponse
from novelverse.schemas.novel import NovelCreate, NovelResponse
from novelverse.schemas.user import UserCreate, UserInDB
from novelverse.storage import DatabaseStorage, MemoryStorage, NovelStorage

# Use in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"

# Foreign keys are switched on by the connect listener in novelverse.core.database
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={
        "check_same_thread": False,
    },
    poolclass=StaticPool,
    echo=False,
)

# Create test session
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(params=["database", "memory"])
def storage(request, db_session) -> NovelStorage:
    """Every storage contract test runs against both backends."""
    if request.param == "memory":
        return MemoryStorage()
    return DatabaseStorage(db_session)


@pytest.fixture
def db_storage(db_session) -> DatabaseStorage:
    """Storage sharing the session the API client uses."""
    return DatabaseStorage(db_session)


@pytest.fixture(scope="function")
def client(db_session) -> Generator[TestClient, None, None]:
    """Create a test client with database session override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(db_session):
    """Create an async test client."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        base_url="http://test", transport=httpx.ASGITransport(app=app)
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def test_user_data() -> Dict[str, Any]:
    """Test user data."""
    return {
        "email": "reader@example.com",
        "username": "reader",
        "password": "readerpass123",
        "is_admin": False,
    }


@pytest.fixture
def test_admin_data() -> Dict[str, Any]:
    """Test admin user data."""
    return {
        "email": "editor@example.com",
        "username": "editor",
        "password": "editorpass123",
        "is_admin": True,
    }


@pytest.fixture
def test_user(db_storage, test_user_data) -> UserInDB:
    """Create a test user."""
    return db_storage.create_user(UserCreate(**test_user_data))


@pytest.fixture
def test_user_2(db_storage) -> UserInDB:
    """Create a second test user."""
    return db_storage.create_user(
        UserCreate(
            email="reader2@example.com", username="reader2", password="readerpass456"
        )
    )


@pytest.fixture
def test_admin_user(db_storage, test_admin_data) -> UserInDB:
    """Create a test admin user."""
    return db_storage.create_user(UserCreate(**test_admin_data))


@pytest.fixture
def user_token(test_user) -> str:
    """Generate JWT token for test user."""
    return create_access_token(test_user.id)


@pytest.fixture
def admin_token(test_admin_user) -> str:
    """Generate JWT token for test admin user."""
    return create_access_token(test_admin_user.id)


@pytest.fixture
def auth_headers(user_token) -> Dict[str, str]:
    """Authentication headers for regular user."""
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture
def auth_headers_2(test_user_2) -> Dict[str, str]:
    """Authentication headers for the second regular user."""
    return {"Authorization": f"Bearer {create_access_token(test_user_2.id)}"}


@pytest.fixture
def admin_headers(admin_token) -> Dict[str, str]:
    """Authentication headers for admin user."""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def test_novel_data() -> Dict[str, Any]:
    """Test novel data."""
    return {
        "title": "The Ember Throne",
        "author": "Mara Vell",
        "description": "A disgraced knight guards the last heir of a burning kingdom.",
        "genre": "Fantasy",
        "tags": ["dragons", "magic"],
        "is_featured": True,
        "is_trending": False,
        "views": 120,
    }


@pytest.fixture
def test_novel(db_storage, test_novel_data, test_admin_user) -> NovelResponse:
    """Create a test novel."""
    return db_storage.create_novel(
        NovelCreate(**test_novel_data), created_by=test_admin_user.id
    )


@pytest.fixture
def test_novel_2(db_storage) -> NovelResponse:
    """Create a second test novel."""
    return db_storage.create_novel(
        NovelCreate(
            title="Dune Reborn",
            author="K. Osei",
            description="Colonists wake a buried desert city.",
            genre=Genre.SCIENCE_FICTION,
            tags=["space", "desert"],
            is_trending=True,
            views=40,
        )
    )


@pytest.fixture
def test_chapter(db_storage, test_novel) -> ChapterResponse:
    """Create a test chapter."""
    return db_storage.create_chapter(
        ChapterCreate(
            novel_id=test_novel.id,
            title="The Ash Road",
            content="<p>Smoke rose over the capital.</p>",
            chapter_number=1,
        )
    )


@pytest.fixture
def api_prefix() -> str:
    """API prefix."""
    return "/api"
