"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Bearer tokens for admin and regular callers
- Seeded companies and jobs
"""

import os
from decimal import Decimal

# Point the app's engine at SQLite before anything imports jobly.core.database
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.database import Base, get_db
from jobly.core.security import create_access_token
from jobly.models import Company, Job
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
def admin_headers():
    """Authorization header for an admin caller"""
    token = create_access_token("admin", is_admin=True)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers():
    """Authorization header for a logged-in, non-admin caller"""
    token = create_access_token("u1", is_admin=False)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_companies(db_session):
    """Three companies: c1 (1 employee), c2 (2), c3 (3)"""
    companies = [
        Company(handle="c1", name="C1", description="Desc1", num_employees=1, logo_url="http://c1.img"),
        Company(handle="c2", name="C2", description="Desc2", num_employees=2, logo_url="http://c2.img"),
        Company(handle="c3", name="C3", description="Desc3", num_employees=3, logo_url=None),
    ]
    db_session.add_all(companies)
    db_session.commit()
    return [c.handle for c in companies]


@pytest.fixture
def sample_jobs(db_session, sample_companies):
    """Jobs keyed by title -> id"""
    jobs = [
        Job(title="Engineer", salary=90000, equity=Decimal("0.01"), company_handle="c1"),
        Job(title="Analyst", salary=50000, equity=Decimal("0"), company_handle="c1"),
        Job(title="Designer", salary=None, equity=None, company_handle="c2"),
    ]
    db_session.add_all(jobs)
    db_session.commit()
    return {job.title: job.id for job in jobs}
