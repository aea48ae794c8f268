"""
Test configuration and fixtures
"""
import os
import tempfile
from typing import Generator

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set testing environment before the app reads its settings
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-jwt-secret-for-testing-only"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="nodues-uploads-")

from nodues.main import app  # noqa: E402
from nodues.core.database import get_db  # noqa: E402
from nodues.core.security import create_access_token  # noqa: E402
from nodues.models.base import Base  # noqa: E402
from nodues.models.user import Role, User  # noqa: E402
from nodues.services.auth import create_user  # noqa: E402
from nodues.services.storage import FileSink, get_file_sink  # noqa: E402

fake = Faker()

PASSWORD = "correct-horse-battery"

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Fresh schema and session for each test"""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def upload_sink(tmp_path) -> FileSink:
    return FileSink(tmp_path / "uploads", max_bytes=1024)


@pytest.fixture
def client(db_session: Session, upload_sink: FileSink) -> Generator[TestClient, None, None]:
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_sink] = lambda: upload_sink
    with TestClient(app) as tc:
        yield tc
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session: Session):
    def _make(role: Role = Role.student, **fields) -> User:
        fields.setdefault("email", fake.unique.email())
        fields.setdefault("name", fake.name())
        fields.setdefault("password", PASSWORD)
        return create_user(db_session, role=role, **fields)

    return _make


def headers_for(user: User) -> dict:
    token = create_access_token(user.id, user.email, user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    return headers_for


@pytest.fixture
def student(make_user) -> User:
    return make_user(Role.student, roll_no="R1", course="B.Tech", year="4")


@pytest.fixture
def other_student(make_user) -> User:
    return make_user(Role.student, roll_no="R2")


@pytest.fixture
def staff(make_user) -> User:
    return make_user(Role.staff, department="Library")


@pytest.fixture
def admin(make_user) -> User:
    return make_user(Role.admin)


@pytest.fixture
def student_headers(student: User) -> dict:
    return headers_for(student)


@pytest.fixture
def staff_headers(staff: User) -> dict:
    return headers_for(staff)


@pytest.fixture
def admin_headers(admin: User) -> dict:
    return headers_for(admin)


@pytest.fixture
def register_payload():
    def _payload(role: str, **fields) -> dict:
        payload = {
            "email": fake.unique.email(),
            "password": PASSWORD,
            "role": role,
            "name": fake.name(),
        }
        payload.update(fields)
        return payload

    return _payload
