"""Shared test fixtures."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from booking_manager.core.database import get_session
from booking_manager.main import app
from booking_manager.models import Attendee, Booking, EventType, Host


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Create a test client with the test database session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="event_type")
def event_type_fixture(session: Session) -> EventType:
    """Create an event type with one regular host and one ignored host."""
    event_type = EventType(title="Intro Call", slug="intro-call", length_minutes=30)
    session.add(event_type)
    session.flush()

    session.add(Host(event_type_id=event_type.id, email="host@example.com", name="Host"))
    session.add(
        Host(
            event_type_id=event_type.id,
            email="observer@example.com",
            name="Observer",
            ignore_for_availability=True,
        )
    )
    session.commit()
    session.refresh(event_type)
    return event_type


@pytest.fixture(name="linkedin_attendees")
def linkedin_attendees_fixture(session: Session, event_type: EventType) -> list[Attendee]:
    """Three attendees sharing one LinkedIn URL: primary, differing duplicate, same-email repeat."""
    booking = Booking(
        event_type_id=event_type.id,
        title="Earlier booking",
        start_time=datetime(2026, 1, 5, 9, 0),
        end_time=datetime(2026, 1, 5, 9, 30),
    )
    session.add(booking)
    session.flush()

    attendees = [
        Attendee(
            booking_id=booking.id,
            email=email,
            name="Pat",
            linkedin_url="linkedin.com/in/pat",
        )
        for email in ("p@x.com", "d1@x.com", "p@x.com")
    ]
    for attendee in attendees:
        session.add(attendee)
    session.commit()
    for attendee in attendees:
        session.refresh(attendee)
    return attendees
