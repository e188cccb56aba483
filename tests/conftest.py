"""
Shared fixtures: a fresh SQLite database per test and a demo wedding
"""

import pytest
from datetime import datetime
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.core.db import Base, get_db
from app.models import Event, Label, Perk, LabelPerk, Guest, ItineraryEvent
from app.utils.security import rate_limiter

from main import app

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_event_logistics.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_HEADERS = {"Authorization": f"Bearer {settings.ADMIN_TOKEN}"}

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def session_factory(db_session):
    """Opens extra sessions on the test database, for stale-read scenarios"""
    sessions = []

    def make_session():
        session = TestingSessionLocal()
        sessions.append(session)
        return session

    yield make_session
    for session in sessions:
        session.close()

@pytest.fixture
def client(db_session):
    """Create a test client with test database"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    rate_limiter.clear()
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def make_guest(db_session):
    """Insert a guest with deterministic credentials derived from the name"""
    def factory(event, name, label=None, allocated_seats=1, **fields):
        slug = name.lower().replace(" ", "-")
        guest = Guest(
            event_id=event.id,
            label_id=label.id if label else None,
            name=name,
            email=f"{slug}@example.com",
            booking_ref=f"REF-{slug.upper()}",
            access_token=f"token-{slug}",
            allocated_seats=allocated_seats,
            **fields
        )
        db_session.add(guest)
        db_session.commit()
        db_session.refresh(guest)
        return guest

    return factory

@pytest.fixture
def wedding(db_session):
    """Event with VIP/Friend/Family labels, two perks and a spa itinerary slot"""
    event = Event(
        name="Smith & Jones Wedding",
        date=datetime(2024, 8, 15),
        location="Grand Hotel, Amalfi Coast",
        event_code="AMALFI24",
        is_published=True
    )
    db_session.add(event)
    db_session.flush()

    vip = Label(event_id=event.id, name="VIP", description="Close family and friends")
    friend = Label(event_id=event.id, name="Friend")
    family = Label(event_id=event.id, name="Family of the Bride")
    pickup = Perk(event_id=event.id, name="Airport Pickup", type="transport")
    spa = Perk(event_id=event.id, name="Spa", type="activity")
    db_session.add_all([vip, friend, family, pickup, spa])
    db_session.flush()

    db_session.add_all([
        LabelPerk(label_id=vip.id, perk_id=spa.id, is_enabled=True, expense_handled_by_client=True),
        LabelPerk(label_id=friend.id, perk_id=pickup.id, is_enabled=True, expense_handled_by_client=True),
        LabelPerk(label_id=friend.id, perk_id=spa.id, is_enabled=False, expense_handled_by_client=False),
    ])

    spa_session = ItineraryEvent(
        event_id=event.id,
        perk_id=spa.id,
        title="Morning Spa Session",
        start_time=datetime(2024, 8, 15, 9, 0),
        end_time=datetime(2024, 8, 15, 11, 0),
        capacity=1
    )
    db_session.add(spa_session)
    db_session.commit()

    return {
        "event": event,
        "vip": vip,
        "friend": friend,
        "family": family,
        "pickup": pickup,
        "spa": spa,
        "spa_session": spa_session,
    }
