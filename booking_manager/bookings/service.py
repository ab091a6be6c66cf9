"""Booking creation with attendee identity reconciliation."""
import logging
from datetime import UTC, datetime
from typing import Any

from pydantic import field_validator
from sqlmodel import Field, Session, SQLModel

from booking_manager.attendees.reconciliation import (
    extract_linkedin_url_from_responses,
    reconcile_attendee_by_linkedin,
)
from booking_manager.bookings.availability import hosts_for_invites, is_slot_available
from booking_manager.models import Attendee, Booking, EventType

logger = logging.getLogger(__name__)


class BookingError(Exception):
    """Base class for booking failures."""


class EventTypeNotFoundError(BookingError):
    """The requested event type does not exist."""


class InvalidBookingTimeError(BookingError):
    """The booking ends before it starts."""


class SlotUnavailableError(BookingError):
    """A host counted for availability is already booked in this slot."""


class BookingCreate(SQLModel):
    """Payload for creating a booking."""
    event_type_id: int
    start_time: datetime
    end_time: datetime
    name: str
    email: str
    title: str | None = None
    responses: dict[str, Any] = Field(default_factory=dict)

    @field_validator("start_time", "end_time")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        """Convert to UTC. Times without an offset are taken to be UTC already."""
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


def build_booker_attendee(session: Session, data: BookingCreate) -> Attendee:
    """
    Build the booker's attendee record, reconciled by LinkedIn URL.

    If the form responses contain a LinkedIn profile that an earlier attendee
    already has, the earlier attendee's email becomes this attendee's primary
    email and the email typed on this booking is kept as the outreach email.
    """
    attendee = Attendee(email=data.email, name=data.name)

    linkedin_url = extract_linkedin_url_from_responses(data.responses)
    if not linkedin_url:
        return attendee

    attendee.linkedin_url = linkedin_url
    reconciled = reconcile_attendee_by_linkedin(session, linkedin_url, data.email)
    if reconciled:
        attendee.email = reconciled.reconciled_email
        attendee.outreach_email = reconciled.outreach_email
        if reconciled.outreach_email:
            logger.info(
                f"Reconciled booker {data.email} to {reconciled.reconciled_email} "
                f"via {linkedin_url}"
            )

    return attendee


def create_booking(session: Session, data: BookingCreate) -> Booking:
    """
    Create a booking with its attendees.

    The booker is reconciled against earlier attendees by LinkedIn URL.
    Every host of the event type is added as an attendee, including hosts
    ignored for availability.

    Raises:
        EventTypeNotFoundError: Unknown event type.
        InvalidBookingTimeError: end_time is not after start_time.
        SlotUnavailableError: A host counted for availability is busy.
    """
    event_type = session.get(EventType, data.event_type_id)
    if not event_type:
        raise EventTypeNotFoundError(f"Event type {data.event_type_id} not found")

    if data.end_time <= data.start_time:
        raise InvalidBookingTimeError("Booking must end after it starts")

    if not is_slot_available(session, event_type, data.start_time, data.end_time):
        raise SlotUnavailableError("Requested time is no longer available")

    booker = build_booker_attendee(session, data)

    booking = Booking(
        event_type_id=event_type.id,
        title=data.title or f"{event_type.title} with {data.name}",
        start_time=data.start_time,
        end_time=data.end_time,
        responses=data.responses,
    )
    session.add(booking)
    session.flush()  # Get booking.id

    booker.booking_id = booking.id
    session.add(booker)
    for host in hosts_for_invites(event_type.hosts):
        session.add(Attendee(booking_id=booking.id, email=host.email, name=host.name))

    session.commit()
    session.refresh(booking)
    logger.info(f"Created booking {booking.id} for {booker.email} on {event_type.slug}")
    return booking
