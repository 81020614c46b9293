"""
Pytest configuration file.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.core.database import Base, get_db
from app.core.security import create_access_token
from app.models.user import User
from app.models.event import Event, EventType
from app.models.registration import EventRegistration, RegistrationStatus
from main import app
from datetime import datetime, timedelta, timezone

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Override database dependency for testing."""
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


def auth_headers(member: User) -> dict:
    token = create_access_token({"sub": member.id, "email": member.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def db():
    """Create test database."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create test client."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_member(db):
    """Create a sample member with a short, readable id."""
    user = User(
        id="m1",
        email="member@college.edu",
        name="Test Member"
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def sample_creator(db):
    """Create the member who organizes the sample event."""
    user = User(
        id="creator-1",
        email="organizer@college.edu",
        name="Test Organizer"
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def sample_event(db, sample_creator):
    """Create an event with short code 042613."""
    event = Event(
        id="e1",
        name="Test Event",
        description="A test event",
        location="Main Auditorium",
        type=EventType.OFFLINE,
        event_date=datetime.now(timezone.utc) + timedelta(days=7),
        created_by_id=sample_creator.id,
        short_code=42613
    )
    db.add(event)
    db.add(EventRegistration(
        event_id="e1",
        member_id=sample_creator.id,
        status=RegistrationStatus.REGISTERED
    ))
    db.commit()
    db.refresh(event)
    return event


@pytest.fixture
def sample_registration(db, sample_member, sample_event):
    """Register the sample member for the sample event."""
    registration = EventRegistration(
        event_id=sample_event.id,
        member_id=sample_member.id,
        status=RegistrationStatus.REGISTERED
    )
    db.add(registration)
    db.commit()
    db.refresh(registration)
    return registration
