"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Settings are read at import time; point them at SQLite and a cheap hash first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "1")
os.environ.setdefault("PASSWORD_HASH_MEMORY_COST", "1024")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from datetime import date
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from foodtrace.main import app
from foodtrace.core.database import Base, get_db
from foodtrace.models import Employee, Ingredient, Organization
from foodtrace.schemas import RegisterRequest
from foodtrace.services import OrganizationService


# SQLite in-memory database for testing; foreign keys are enabled by the
# connect listener in foodtrace.core.database
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ORG_A_EMAIL = "bakery@test.com"
ORG_A_PASSWORD = "flour-power"
ORG_B_EMAIL = "creamery@test.com"
ORG_B_PASSWORD = "churn-churn"


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    # Create all tables
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
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
def seed_org(db_session) -> Organization:
    """Organization with credentials."""
    return OrganizationService(db_session).register(
        RegisterRequest(name="Test Bakery", email=ORG_A_EMAIL, password=ORG_A_PASSWORD)
    )


@pytest.fixture
def seed_other_org(db_session) -> Organization:
    """A second, unrelated tenant."""
    return OrganizationService(db_session).register(
        RegisterRequest(name="Test Creamery", email=ORG_B_EMAIL, password=ORG_B_PASSWORD)
    )


def _login(client, email, password):
    response = client.post("/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, f"Login failed: {response.json()}"
    token = response.json()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client, seed_org):
    """Get authentication headers for API calls."""
    return _login(client, ORG_A_EMAIL, ORG_A_PASSWORD)


@pytest.fixture
def other_auth_headers(client, seed_other_org):
    """Authentication headers for the second tenant."""
    return _login(client, ORG_B_EMAIL, ORG_B_PASSWORD)


@pytest.fixture
def seed_employee(db_session, seed_org) -> Employee:
    employee = Employee(org_id=seed_org.id, name="Pat Mixer", role="Baker")
    db_session.add(employee)
    db_session.commit()
    db_session.refresh(employee)
    return employee


@pytest.fixture
def seed_ingredients(db_session, seed_org):
    """Two ingredient lots: flour and salt."""
    flour = Ingredient(org_id=seed_org.id, lotcode="FL-100", name="Flour", date=date(2024, 3, 1))
    salt = Ingredient(org_id=seed_org.id, lotcode="SA-200", name="Salt", date=date(2024, 3, 2))
    db_session.add_all([flour, salt])
    db_session.commit()
    db_session.refresh(flour)
    db_session.refresh(salt)
    return flour, salt
