"""Pytest configuration and fixtures."""

import os
from unittest.mock import MagicMock

import pytest

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL", "").startswith("postgresql"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"].replace("/dailymate", "/dailymate_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src.api.dependencies import get_image_service, get_refresh_token_store  # noqa: E402
from src.database import Base, get_db  # noqa: E402
from src.main import app  # noqa: E402
from src.services.image_service import ImageService  # noqa: E402
from src.services.token_store import RefreshTokenStore  # noqa: E402

TEST_PASSWORD = "testpass1!"  # noqa: S105

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id, email and tokens."""

    def __init__(
        self,
        *args,
        user_id: int | None = None,
        email: str | None = None,
        refresh_token: str | None = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.refresh_token = refresh_token

    @property
    def access_token(self) -> str:
        return self["Authorization"].removeprefix("Bearer ")


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


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
def fake_redis():
    """MagicMock standing in for redis.Redis, backed by a plain dict."""
    store: dict[str, str] = {}
    client = MagicMock()
    client.set.side_effect = lambda key, value, ex=None: store.__setitem__(key, value)
    client.get.side_effect = lambda key: store.get(key)
    client.delete.side_effect = lambda key: store.pop(key, None)
    client.store = store
    return client


@pytest.fixture
def token_store(fake_redis):
    return RefreshTokenStore(fake_redis, ttl_seconds=3600)


@pytest.fixture
def image_service(tmp_path):
    return ImageService(upload_dir=tmp_path / "media", media_url="/media")


@pytest.fixture(scope="function")
def client(db, token_store, image_service):
    """Create a test client with database, Redis and storage overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_refresh_token_store] = lambda: token_store
    app.dependency_overrides[get_image_service] = lambda: image_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register_and_login(client, email: str, nickname: str) -> AuthHeaders:
    """Sign up a user, log in and return bearer headers."""
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": email, "password": TEST_PASSWORD, "nickname": nickname},
    )
    assert response.status_code == 201, response.text

    response = client.post("/api/v1/auth/login", json={"email": email, "password": TEST_PASSWORD})
    assert response.status_code == 200, response.text
    data = response.json()

    me = client.get(
        "/api/v1/user/me", headers={"Authorization": f"Bearer {data['access_token']}"}
    ).json()

    return AuthHeaders(
        {"Authorization": f"Bearer {data['access_token']}"},
        user_id=me["id"],
        email=email,
        refresh_token=data["refresh_token"],
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register_and_login(client, "test@example.com", "tester")


@pytest.fixture
def other_headers(client):
    """A second user, not a friend of the first."""
    return register_and_login(client, "other@example.com", "other")


@pytest.fixture
def friend_headers(client, auth_headers):
    """A third user who is a confirmed friend of the ``auth_headers`` user."""
    headers = register_and_login(client, "friend@example.com", "buddy")
    response = client.post(f"/api/v1/friend/request/{auth_headers.user_id}", headers=headers)
    assert response.status_code == 200, response.text
    response = client.put(f"/api/v1/friend/request/{headers.user_id}", headers=auth_headers)
    assert response.status_code == 200, response.text
    return headers


@pytest.fixture
def make_user(client):
    """Factory fixture for additional logged-in users."""

    def _make_user(email: str, nickname: str) -> AuthHeaders:
        return register_and_login(client, email, nickname)

    return _make_user
