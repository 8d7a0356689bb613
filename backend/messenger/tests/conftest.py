"""
Common test fixtures.

Provides an in-memory SQLite database wired into the app through the get_db
dependency, a fresh token registry per test, and helpers for creating users
and logging them in.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from messenger.core.security import get_password_hash
from messenger.core.token_registry import TokenRegistry
from messenger.db.base import Base
from messenger.db.session import get_db
from messenger.main import app
from messenger.models import User

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db():
    """Session for seeding and inspecting the test database."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def registry():
    return TokenRegistry()


@pytest.fixture
def client(db, registry):
    """TestClient bound to the test database and a fresh token registry."""
    app.dependency_overrides[get_db] = override_get_db
    app.state.token_registry = registry
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def create_user(db):
    """Factory inserting a user directly into the store."""
    def _create(username, password="secret123", is_admin=False, **fields):
        user = User(
            username=username,
            password=get_password_hash(password),
            is_admin=is_admin,
            **fields
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _create


@pytest.fixture
def login(client):
    """Log a user in through the API and return Authorization headers."""
    def _login(username, password="secret123"):
        resp = client.post(
            "/api/user/login",
            json={"username": username, "password": password}
        )
        assert resp.status_code == 200
        return {"Authorization": resp.text}
    return _login


@pytest.fixture
def admin(create_user):
    return create_user("admin", password="adminpass", is_admin=True, name="Ada", surname="Admin")


@pytest.fixture
def alice(create_user):
    return create_user(
        "alice", name="Alice", surname="Smith", gender="Female",
        email="alice@example.com", location="Ankara"
    )


@pytest.fixture
def bob(create_user):
    return create_user(
        "bob", name="Bob", surname="Jones", gender="Male",
        email="bob@example.com", location="Izmir"
    )


@pytest.fixture
def admin_headers(admin, login):
    return login("admin", "adminpass")


@pytest.fixture
def alice_headers(alice, login):
    return login("alice")


@pytest.fixture
def bob_headers(bob, login):
    return login("bob")
