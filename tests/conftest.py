"""Test configuration and fixtures.

The application is pointed at an in-memory SQLite database before any app
module is imported; tables are created and dropped around every test.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["POLICY_EXPIRATION_CHECK_ENABLED"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-only"

from datetime import date
from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

import app.models  # noqa: F401
from app.db.session import Base, SessionLocal, engine
from app.main import app as fastapi_app
from app.models import Car, Claim, InsurancePolicy, Owner
from app.services import auth_service

TEST_USERNAME = "alice"
TEST_PASSWORD = "s3cret-pass"
TEST_EMAIL = "alice@example.com"


@pytest.fixture(autouse=True)
def setup_database() -> Generator[None, None, None]:
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client() -> TestClient:
    return TestClient(fastapi_app)


@pytest.fixture
def user(db: Session):
    return auth_service.register(db, TEST_USERNAME, TEST_PASSWORD, TEST_EMAIL)


@pytest.fixture
def auth_client(client: TestClient, user) -> TestClient:
    """Client holding the JWT cookie of a logged-in user."""
    response = client.post(
        "/api/auth/login",
        json={"username": TEST_USERNAME, "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def owner(db: Session) -> Owner:
    owner = Owner(name="Ana Pop", email="ana.pop@example.com")
    db.add(owner)
    db.commit()
    db.refresh(owner)
    return owner


@pytest.fixture
def car(db: Session, owner: Owner) -> Car:
    car = Car(vin="VIN123456789", make="Dacia", model="Logan", year_of_manufacture=2018, owner_id=owner.id)
    db.add(car)
    db.commit()
    db.refresh(car)
    return car


def add_policy(db: Session, car: Car, start: date, end, provider="GEICO") -> InsurancePolicy:
    policy = InsurancePolicy(car_id=car.id, provider=provider, start_date=start, end_date=end)
    db.add(policy)
    db.commit()
    db.refresh(policy)
    return policy


def add_claim(db: Session, car: Car, claim_date: date, description="Hail damage", amount="1500.00") -> Claim:
    claim = Claim(car_id=car.id, claim_date=claim_date, description=description, amount=Decimal(amount))
    db.add(claim)
    db.commit()
    db.refresh(claim)
    return claim
