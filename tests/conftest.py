"""
Shared pytest configuration: in-memory database, sample courts and users
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from unisport.database import Base, get_db

# Import every model so SQLAlchemy can resolve the relationships
from unisport.models.user import User, UserRole
from unisport.models.venue import Venue
from unisport.models.court_type import CourtType
from unisport.models.court import Court, CourtStatus
from unisport.models.court_mapping import CourtMapping
from unisport.models.booking import Booking, BookingStatus, PaymentStatus
from unisport.models.notification import Notification
from unisport.services.auth import create_access_token


# In-memory database for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

BOOKING_DATE = date(2024, 6, 1)


@pytest.fixture
def db():
    """Create the test database and drop it afterwards"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """TestClient bound to the test session"""
    from unisport.main import app

    def _get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def venue(db):
    venue = Venue(id=1, name="Main Sports Hall", address="Campus A")
    court_type = CourtType(id=1, name="Badminton")
    db.add_all([venue, court_type])
    db.commit()
    return venue


@pytest.fixture
def make_court(db, venue):
    """Factory for courts with a given id, status and hourly rate"""

    def _make_court(court_id, status=CourtStatus.AVAILABLE, hourly_rate="100000"):
        court = Court(
            id=court_id,
            name=f"Court {court_id}",
            code=f"C{court_id:03d}",
            hourly_rate=Decimal(hourly_rate),
            status=status,
            venue_id=venue.id,
            type_id=1,
        )
        db.add(court)
        db.commit()
        db.refresh(court)
        return court

    return _make_court


@pytest.fixture
def make_mapping(db):
    def _make_mapping(parent_court_id, child_court_id, position=None):
        mapping = CourtMapping(
            parent_court_id=parent_court_id,
            child_court_id=child_court_id,
            position=position,
        )
        db.add(mapping)
        db.commit()
        db.refresh(mapping)
        return mapping

    return _make_mapping


@pytest.fixture
def make_booking(db):
    """Factory inserting a booking row directly, bypassing the checks"""
    counter = {"value": 0}

    def _make_booking(
        court_id,
        start_time,
        end_time,
        booking_date=BOOKING_DATE,
        status=BookingStatus.CONFIRMED,
        user_id=None,
    ):
        counter["value"] += 1
        booking = Booking(
            court_id=court_id,
            user_id=user_id,
            date=booking_date,
            start_time=start_time,
            end_time=end_time,
            total_amount=Decimal("100000"),
            status=status,
            payment_status=PaymentStatus.UNPAID,
            renter_name="Existing Renter",
            renter_phone="0900000000",
            booking_code=f"BKTEST{counter['value']:04d}",
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return _make_booking


@pytest.fixture
def sample_user(db):
    user = User(
        id=1,
        name="Student",
        email="student@example.com",
        hashed_password="hashed",
        role=UserRole.USER,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db):
    user = User(
        id=2,
        name="Admin",
        email="admin@example.com",
        hashed_password="hashed",
        role=UserRole.ADMIN,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def user_headers(sample_user):
    token = create_access_token({"sub": sample_user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user):
    token = create_access_token({"sub": admin_user.email})
    return {"Authorization": f"Bearer {token}"}
