import os

# Must be set before the app modules are imported
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-for-hs256-signing-0123456789"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_EXPIRES_IN"] = "15m"

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine
from app.models.user import User, Role
from app.core.security import create_access_token, hash_password
from main import app

DEFAULT_PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    """Insert a user directly, bypassing the API."""
    def _make_user(email="user@example.com", password=DEFAULT_PASSWORD, role=Role.USER,
                   name="Jane", surname="Doe"):
        user = User(
            email=email,
            name=name,
            surname=surname,
            hashed_password=hash_password(password),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


def auth_headers(user, **token_kwargs):
    token = create_access_token(user.id, user.email, user.role, **token_kwargs)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(email="admin@example.com", role=Role.ADMIN, name="Ada", surname="Admin")


@pytest.fixture
def user_headers(user):
    return auth_headers(user)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)
