"""Pytest fixtures — throwaway SQLite database for fast, isolated tests."""
import os

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

SQLITE_URL = "sqlite:///./test.db"
os.environ.setdefault("DATABASE_URL", SQLITE_URL)

from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.services import identity_service  # noqa: E402

# Import all models so they register with Base.metadata
from app.models.user import User          # noqa: F401,E402
from app.models.category import Category  # noqa: F401,E402
from app.models.wish import Wish          # noqa: F401,E402


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session for service-level tests."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_engine):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def alice(db):
    return identity_service.resolve_or_create(db, "alice@example.com", "Alice")


@pytest.fixture
def bob(db):
    return identity_service.resolve_or_create(db, "bob@example.com", "Bob")


# ---------------------------------------------------------------------------
# Helpers: drive the API as a given user, return the response JSON dict
# ---------------------------------------------------------------------------
def auth(email: str) -> dict:
    """Headers the authentication proxy would attach for ``email``."""
    return {"X-User-Email": email}


def login_test_user(client: TestClient, email: str = "test@example.com", name: str = "Test User") -> dict:
    """Helper — POST /api/users/login and return response JSON."""
    resp = client.post("/api/users/login", json={
        "email": email,
        "name": name,
        "picture": "https://example.com/avatar.png",
    })
    assert resp.status_code == 200, resp.text
    return resp.json()


def create_test_category(client: TestClient, email: str, name: str = "Travel", color: str = "#3B82F6") -> dict:
    """Helper — POST /api/categories and return response JSON."""
    resp = client.post("/api/categories/", headers=auth(email), json={
        "name": name,
        "description": f"{name} goals",
        "color": color,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_wish(client: TestClient, email: str, category_id: str, title: str = "Visit Japan") -> dict:
    """Helper — POST /api/wishes and return response JSON."""
    resp = client.post("/api/wishes/", headers=auth(email), json={
        "title": title,
        "description": "Cherry blossom season",
        "category_id": category_id,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()
