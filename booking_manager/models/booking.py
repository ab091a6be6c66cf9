"""Booking model for scheduled meetings on an event type."""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from booking_manager.models.attendee import Attendee
    from booking_manager.models.event_type import EventType


class Booking(SQLModel, table=True):
    """A booked time slot on an event type.

    Attributes:
        id: Auto-incrementing identifier.
        event_type_id: Foreign key to the booked EventType.
        title: Booking title shown in invites.
        start_time: When the meeting starts.
        end_time: When the meeting ends.
        responses: Raw booking form answers, keyed by field name. Values
            are whatever the form submitted (strings, numbers, lists...).
        created_at: When the booking was made.
        attendees: The booker plus the event type's hosts.
        event_type: Reference to the parent EventType.
    """
    id: int | None = Field(default=None, primary_key=True)
    event_type_id: int = Field(foreign_key="eventtype.id", index=True)
    title: str
    start_time: datetime = Field(index=True)
    end_time: datetime
    responses: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationships
    attendees: list["Attendee"] = Relationship(back_populates="booking")
    event_type: Optional["EventType"] = Relationship(back_populates="bookings")
