"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seeded users, companies and jobs
- Bearer headers for a regular user and an admin
"""

import os

# Must be set before app.core.config is imported
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("SECRET_KEY", "test-secret")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_token, get_password_hash
from app.models import Company, Job, User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seeded(db_session):
    """
    Three companies, four jobs (all at c1) and three users (u3 is an admin).

    Passwords are "password1", "password2" and "password3".
    """
    db_session.add_all([
        Company(handle="c1", name="C1", description="Desc1", num_employees=1, logo_url="http://c1.img"),
        Company(handle="c2", name="C2", description="Desc2", num_employees=2, logo_url="http://c2.img"),
        Company(handle="c3", name="C3", description="Desc3", num_employees=3, logo_url=None),
    ])
    db_session.flush()

    jobs = [
        Job(title="J1", salary=100, equity=Decimal("0.1"), company_handle="c1"),
        Job(title="J2", salary=200, equity=Decimal("0.2"), company_handle="c1"),
        Job(title="J3", salary=300, equity=Decimal("0"), company_handle="c1"),
        Job(title="J4", salary=None, equity=None, company_handle="c1"),
    ]
    db_session.add_all(jobs)

    db_session.add_all([
        User(username="u1", password=get_password_hash("password1"), first_name="U1F",
             last_name="U1L", email="user1@user.com", is_admin=False),
        User(username="u2", password=get_password_hash("password2"), first_name="U2F",
             last_name="U2L", email="user2@user.com", is_admin=False),
        User(username="u3", password=get_password_hash("password3"), first_name="U3F",
             last_name="U3L", email="user3@user.com", is_admin=True),
    ])
    db_session.commit()

    return {"job_ids": [job.id for job in jobs]}


def bearer(user) -> dict:
    """Authorization header for anything with username/is_admin attributes."""
    return {"Authorization": f"Bearer {create_token(user)}"}


class _TokenUser:
    def __init__(self, username, is_admin):
        self.username = username
        self.is_admin = is_admin


@pytest.fixture
def u1_headers():
    """Headers for the regular user u1"""
    return bearer(_TokenUser("u1", False))


@pytest.fixture
def u2_headers():
    """Headers for the regular user u2"""
    return bearer(_TokenUser("u2", False))


@pytest.fixture
def admin_headers():
    """Headers for the admin u3"""
    return bearer(_TokenUser("u3", True))


@pytest.fixture
def sample_job_data():
    """Sample job data for testing"""
    return {
        "title": "Engineer",
        "salary": 100000,
        "equity": "0.1",
        "companyHandle": "c1",
    }
