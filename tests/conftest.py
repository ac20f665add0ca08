# tests/conftest.py
import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
os.environ["APP_URL"] = "http://localhost:3000"

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import get_session
from main import app
from models import Base, Landlord, PropertyUnit, SubscriptionTier, UserRole
from services.auth_service import AuthService
from services.portfolio_service import PortfolioService

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """Requests share the test session so fixtures and assertions see the same rows."""

    def override_get_session():
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise

    app.dependency_overrides[get_session] = override_get_session
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db, email, role=UserRole.LANDLORD, first_name="Lana", last_name="Lord"):
    user = AuthService.register(
        db,
        email=email,
        password="correct-horse",
        first_name=first_name,
        last_name=last_name,
        role=role,
    )
    db.commit()
    return user


def auth_headers(user):
    return {"Authorization": f"Bearer {AuthService.create_access_token(user)}"}


@pytest.fixture
def landlord_user(db):
    return make_user(db, "lana@example.com")


@pytest.fixture
def landlord(db, landlord_user):
    return db.query(Landlord).filter(Landlord.user_id == landlord_user.id).one()


@pytest.fixture
def headers(landlord_user):
    return auth_headers(landlord_user)


@pytest.fixture
def set_tier(db, landlord):
    def _set(tier: SubscriptionTier):
        landlord.subscription_tier = tier
        db.commit()
        return landlord
    return _set


@pytest.fixture
def prop(db, landlord):
    prop = PortfolioService.create_property(db, landlord.id, name="Maple Court", city="Springfield")
    PortfolioService.create_unit(db, landlord.id, prop.id, unit_number="1A", rent_amount=Decimal("1500.00"))
    PortfolioService.create_unit(db, landlord.id, prop.id, unit_number="1B", rent_amount=Decimal("1200.00"))
    db.commit()
    return prop


@pytest.fixture
def units(db, prop):
    return db.query(PropertyUnit).filter(PropertyUnit.property_id == prop.id).order_by(PropertyUnit.unit_number).all()


@pytest.fixture
def tenant(db, landlord):
    tenant = PortfolioService.create_tenant(
        db, landlord.id, first_name="Tom", last_name="Renter", email="tom@example.com"
    )
    db.commit()
    return tenant


@pytest.fixture
def lease(db, landlord, units, tenant):
    lease = PortfolioService.create_lease(
        db,
        landlord.id,
        unit_id=units[0].id,
        tenant_id=tenant.id,
        rent_amount=Decimal("1500.00"),
        start_date=date(2026, 3, 1),
        end_date=date(2027, 2, 28),
    )
    db.commit()
    return lease
