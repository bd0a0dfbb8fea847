"""Pytest configuration and fixtures."""

import os

# Settings are read once at import time, so the environment must be set first
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from src.database import Base, db as database, init_db, open_session  # noqa: E402
from src.main import app  # noqa: E402
from src.models.enums import Role  # noqa: E402
from src.models.staff_member import StaffMember  # noqa: E402
from src.models.user import User  # noqa: E402
from src.services.auth import STAFF_TOKEN, create_access_token, get_password_hash  # noqa: E402

TEST_PASSWORD = "testpass123"  # noqa: S105


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if database.url.get_backend_name() == "postgresql":
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(database.url):
            create_database(database.url)

    init_db()
    yield
    database.close()


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = open_session()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    with TestClient(app) as test_client:
        yield test_client


def make_user(db, email: str, role: str = Role.USER.value, name: str = "Test User") -> User:
    user = User(email=email, password_hash=get_password_hash(TEST_PASSWORD), name=name, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def headers_for(user: User) -> AuthHeaders:
    token = create_access_token(user.id, user.email, user.role)
    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user.id, email=user.email)


@pytest.fixture
def auth_headers(db):
    """Headers for a regular account."""
    return headers_for(make_user(db, "test@example.com"))


@pytest.fixture
def admin_headers(db):
    """Headers for an admin account."""
    return headers_for(make_user(db, "admin@example.com", role=Role.ADMIN.value, name="Admin"))


@pytest.fixture
def staff_headers(db):
    """Headers for an active staff member."""
    staff = StaffMember(
        email="staff@example.com",
        name="Floor Staff",
        password=get_password_hash(TEST_PASSWORD),
        role=Role.STAFF.value,
    )
    db.add(staff)
    db.commit()
    db.refresh(staff)
    token = create_access_token(staff.id, staff.email, staff.role, kind=STAFF_TOKEN)
    return AuthHeaders({"Authorization": f"Bearer {token}"}, email=staff.email)
