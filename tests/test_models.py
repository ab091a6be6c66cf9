"""Tests for database models."""

from datetime import datetime

import pytest
from sqlmodel import Session, select

from booking_manager.models import Attendee, Booking, EventType, Host


class TestEventTypeModel:
    """Tests for the EventType model."""

    def test_create_event_type(self, session: Session):
        """Test creating an event type with defaults."""
        session.add(EventType(title="Demo", slug="demo"))
        session.commit()

        retrieved = session.exec(select(EventType).where(EventType.slug == "demo")).first()
        assert retrieved is not None
        assert retrieved.length_minutes == 30

    def test_unique_slug(self, session: Session):
        """Test that slug must be unique."""
        session.add(EventType(title="First", slug="same"))
        session.commit()

        session.add(EventType(title="Second", slug="same"))
        with pytest.raises(Exception):  # IntegrityError
            session.commit()


class TestHostModel:
    """Tests for the Host model."""

    def test_ignore_for_availability_defaults_false(self, session: Session, event_type: EventType):
        """Test the availability flag default and the event type relationship."""
        host = Host(event_type_id=event_type.id, email="new@example.com")
        session.add(host)
        session.commit()

        retrieved = session.get(Host, host.id)
        assert retrieved.ignore_for_availability is False
        session.refresh(event_type)
        assert len(event_type.hosts) == 3


class TestBookingModel:
    """Tests for the Booking model."""

    def test_responses_round_trip_as_json(self, session: Session, event_type: EventType):
        """Test that arbitrary form responses are stored and read back."""
        booking = Booking(
            event_type_id=event_type.id,
            title="Call",
            start_time=datetime(2026, 3, 1, 10, 0),
            end_time=datetime(2026, 3, 1, 10, 30),
            responses={"linkedin": "https://linkedin.com/in/x", "guests": 2, "tags": ["a"]},
        )
        session.add(booking)
        session.commit()
        session.expire_all()

        retrieved = session.get(Booking, booking.id)
        assert retrieved.responses == {
            "linkedin": "https://linkedin.com/in/x",
            "guests": 2,
            "tags": ["a"],
        }
        assert retrieved.created_at is not None


class TestAttendeeModel:
    """Tests for the Attendee model."""

    def test_ids_increase_with_creation_order(self, session: Session):
        """Test that later attendees get higher ids (the earliest-wins tie-break)."""
        first = Attendee(email="a@x.com")
        second = Attendee(email="b@x.com")
        session.add(first)
        session.commit()
        session.add(second)
        session.commit()

        assert first.id < second.id

    def test_optional_reconciliation_fields(self, session: Session):
        """Test that linkedin_url and outreach_email are nullable."""
        attendee = Attendee(email="a@x.com", name="A")
        session.add(attendee)
        session.commit()

        retrieved = session.get(Attendee, attendee.id)
        assert retrieved.linkedin_url is None
        assert retrieved.outreach_email is None

    def test_attendee_booking_relationship(self, session: Session, linkedin_attendees):
        """Test attendee-booking relationship."""
        booking = linkedin_attendees[0].booking
        assert booking is not None
        session.refresh(booking)
        assert len(booking.attendees) == 3
